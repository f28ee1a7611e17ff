# /gradetracker/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# before `create_all` runs.

from .database import Base

from .models.store_models import StoreEntry
