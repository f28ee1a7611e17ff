# /gradetracker/db/models/store_models.py

"""
This module defines the SQLAlchemy ORM model backing the durable key/value
store. Each row holds one named collection (or one metadata value) as a JSON
document.
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from ..database import Base


class StoreEntry(Base):
    """
    A single key/value pair of the persistent store.

    `value` keeps the exact JSON text that was written so a load returns a
    structure deep-equal to what was saved.
    """
    __tablename__ = "store_entries"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
