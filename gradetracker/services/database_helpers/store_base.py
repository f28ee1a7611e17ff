# /gradetracker/services/database_helpers/store_base.py

"""
The persistent store contract.

A store is a synchronous key/value space whose values are JSON documents.
Concrete stores only implement raw text access; JSON encoding and the
"never written" default live here so every implementation behaves the same.
"""

import copy
import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Union


class StorageKey(str, Enum):
    STUDENTS = "nlac_students"
    COURSES = "nlac_courses"
    ENROLLMENTS = "nlac_enrollments"
    ASSESSMENTS = "nlac_assessments"
    GRADES = "nlac_grades"
    LAST_SYNC = "nlac_last_sync"
    SYNC_ENABLED = "nlac_sync_enabled"


# Collection name (as used in `Collections`) -> storage key.
COLLECTION_KEYS = {
    "students": StorageKey.STUDENTS,
    "courses": StorageKey.COURSES,
    "enrollments": StorageKey.ENROLLMENTS,
    "assessments": StorageKey.ASSESSMENTS,
    "grades": StorageKey.GRADES,
}

KeyLike = Union[StorageKey, str]


def _key(key: KeyLike) -> str:
    return key.value if isinstance(key, Enum) else key


class Store(ABC):

    # --- raw access implemented by each backend ---

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Returns the stored JSON text, or None if the key was never written."""

    @abstractmethod
    def _write(self, key: str, text: str) -> None:
        """Overwrites the JSON text stored under key."""

    @abstractmethod
    def delete(self, key: KeyLike) -> bool:
        """Removes a key. Returns False when it did not exist."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Lists every key currently written."""

    # --- public JSON API ---

    def load(self, key: KeyLike, default: Any = None) -> Any:
        """
        Returns the value stored under `key`. When the key has never been
        written, a copy of `default` is returned (an empty list if no default
        is given). Nothing is written as a side effect.
        """
        text = self._read(_key(key))
        if text is None:
            return copy.deepcopy(default) if default is not None else []
        return json.loads(text)

    def save(self, key: KeyLike, value: Any) -> None:
        self._write(_key(key), json.dumps(value))

    def contains(self, key: KeyLike) -> bool:
        return self._read(_key(key)) is not None
