# /gradetracker/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..core.config import DATABASE_URL

# SQLite connections are shared between the request thread and the worker
# threads used for background pushes.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Session factory handed to SQLKeyValueStore; the store opens one session per read or write.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Declarative base for the store_entries table.
Base = declarative_base()


def init_db(bind=None):
    """Creates every registered table that does not exist yet."""
    # Importing the registry makes sure all models are attached to Base.
    from . import base  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
