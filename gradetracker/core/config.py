# /gradetracker/core/config.py

"""
Central configuration for the Grade Tracker backend.

Values are read once from the environment (a local `.env` file is honoured
through python-dotenv) and exposed as plain module constants, so every other
module simply imports what it needs from here.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# --- Persistence ---
# The durable key/value store lives in this database. SQLite is the default for
# local development; any SQLAlchemy URL works in production.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gradetracker.db")

# --- Synchronization ---
# Tier A is a remote mirror reached over HTTP. When no URL is configured the
# tier is simply absent from the precedence list.
SYNC_PRIMARY_URL = os.getenv("SYNC_PRIMARY_URL", "")
# Tier B is either another remote mirror or, by default, a mirror kept inside
# the local store under its own key prefix.
SYNC_SECONDARY_URL = os.getenv("SYNC_SECONDARY_URL", "")
MIRROR_KEY_PREFIX = os.getenv("MIRROR_KEY_PREFIX", "nlac_cloud_")
# Key space of the dataset this deployment serves to other deployments through
# /api/mirror. Must differ from MIRROR_KEY_PREFIX, otherwise a foreign upload
# would become this deployment's own tier B.
MIRROR_SERVE_PREFIX = os.getenv("MIRROR_SERVE_PREFIX", "nlac_mirror_")

# Upper bound for a single remote call as seen by the sync layer.
SYNC_TIMEOUT_SECONDS = float(os.getenv("SYNC_TIMEOUT_SECONDS", "5"))
# Socket-level timeout handed to the HTTP client.
SYNC_HTTP_TIMEOUT_SECONDS = float(os.getenv("SYNC_HTTP_TIMEOUT_SECONDS", "4"))

# --- Student sessions ---
# A student login stays valid for this many minutes of inactivity.
SESSION_TIMEOUT_MINUTES = int(os.getenv("SESSION_TIMEOUT_MINUTES", "30"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Installs the root logging configuration used by the API process."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
