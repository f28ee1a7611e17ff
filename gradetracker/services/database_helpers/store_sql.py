# /gradetracker/services/database_helpers/store_sql.py

"""
This module contains the SQLAlchemy queries for the `store_entries` table. It is
the direct interface to the database for the durable key/value store.

Every call opens its own short-lived session and commits before returning, so a
`save` is durable as soon as it returns (write-through, no batching).
"""

from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradetracker.db.models.store_models import StoreEntry
from .store_base import Store, KeyLike, _key


class SQLKeyValueStore(Store):
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _read(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            entry = db.get(StoreEntry, key)
            return entry.value if entry else None

    def _write(self, key: str, text: str) -> None:
        with self.session_factory() as db:
            entry = db.get(StoreEntry, key)
            if entry:
                entry.value = text
            else:
                db.add(StoreEntry(key=key, value=text))
            db.commit()

    def delete(self, key: KeyLike) -> bool:
        with self.session_factory() as db:
            entry = db.get(StoreEntry, _key(key))
            if not entry:
                return False
            db.delete(entry)
            db.commit()
            return True

    def keys(self) -> List[str]:
        with self.session_factory() as db:
            return list(db.scalars(select(StoreEntry.key)).all())
