# /gradetracker/services/database_helpers/store_memory.py

from typing import Dict, List, Optional

from .store_base import Store, KeyLike, _key


class InMemoryStore(Store):
    """
    Process-local store. Values are kept as JSON text, exactly like the durable
    store, so a load never hands out a reference to previously saved objects.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: KeyLike) -> bool:
        return self._data.pop(_key(key), None) is not None

    def keys(self) -> List[str]:
        return list(self._data.keys())
