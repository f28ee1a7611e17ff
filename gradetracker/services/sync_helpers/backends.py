# /gradetracker/services/sync_helpers/backends.py

"""
Remote mirror backends.

Every mirror implements the same two-call contract: upload the complete
dataset, or download the complete dataset. There are no partial updates.
Anything that goes wrong inside a backend surfaces as `SyncError`; the sync
service decides what to do with it.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from ...core.config import MIRROR_KEY_PREFIX, SYNC_HTTP_TIMEOUT_SECONDS
from ...core.exceptions import SyncError
from ...models.collections_model import Collections
from ..database_helpers.store_base import COLLECTION_KEYS, Store

logger = logging.getLogger(__name__)

MIRROR_PATH = "/api/mirror"


def parse_collections(payload: Any, source: str) -> Collections:
    """Validates a downloaded payload; malformed data is a sync failure."""
    if not isinstance(payload, dict):
        raise SyncError(f"{source} returned a {type(payload).__name__}, expected an object")
    try:
        return Collections.model_validate(payload)
    except PydanticValidationError as e:
        raise SyncError(f"{source} returned malformed collections: {e.error_count()} errors") from e


class SyncBackend(ABC):
    """One mirror in the precedence list."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def upload_all(self, data: Collections) -> None:
        """Replaces the mirror's dataset with `data`."""

    @abstractmethod
    async def download_all(self) -> Collections:
        """Returns the mirror's complete dataset."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StoreMirrorBackend(SyncBackend):
    """
    A mirror kept in a `Store` under its own key prefix. With the local store
    this reproduces a "cloud" held next to the primary data; with a separate
    store it behaves like an independent replica.
    """

    def __init__(self, name: str, store: Store, key_prefix: str = MIRROR_KEY_PREFIX):
        super().__init__(name)
        self.store = store
        self.key_prefix = key_prefix

    def _key(self, collection: str) -> str:
        return f"{self.key_prefix}{collection}"

    def _write_all(self, payload: dict) -> None:
        for collection in COLLECTION_KEYS:
            self.store.save(self._key(collection), payload[collection])
        self.store.save(self._key("last_sync"), datetime.now(timezone.utc).isoformat())

    def _read_all(self) -> dict:
        return {collection: self.store.load(self._key(collection), []) for collection in COLLECTION_KEYS}

    # A SQL-backed store blocks, so reads and writes run in a worker thread.
    async def upload_all(self, data: Collections) -> None:
        try:
            await asyncio.to_thread(self._write_all, data.model_dump(mode="json"))
        except Exception as e:
            raise SyncError(f"{self.name}: could not write mirror: {e}") from e

    async def download_all(self) -> Collections:
        try:
            payload = await asyncio.to_thread(self._read_all)
        except Exception as e:
            raise SyncError(f"{self.name}: could not read mirror: {e}") from e
        return parse_collections(payload, self.name)


class RestMirrorBackend(SyncBackend):
    """
    A mirror reached over HTTP:

        GET  {base_url}/api/mirror  -> 200, Collections JSON
        PUT  {base_url}/api/mirror  <- Collections JSON, 2xx on success

    `requests` is blocking, so each call runs in a worker thread.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout: float = SYNC_HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(name)
        self.url = base_url.rstrip("/") + MIRROR_PATH
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self) -> Any:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _put(self, payload: dict) -> None:
        response = self.session.put(self.url, json=payload, timeout=self.timeout)
        response.raise_for_status()

    async def upload_all(self, data: Collections) -> None:
        try:
            await asyncio.to_thread(self._put, data.model_dump(mode="json"))
        except requests.RequestException as e:
            raise SyncError(f"{self.name}: upload to {self.url} failed: {e}") from e

    async def download_all(self) -> Collections:
        try:
            payload = await asyncio.to_thread(self._get)
        except requests.RequestException as e:
            raise SyncError(f"{self.name}: download from {self.url} failed: {e}") from e
        except ValueError as e:
            raise SyncError(f"{self.name}: response is not JSON: {e}") from e
        return parse_collections(payload, self.name)
