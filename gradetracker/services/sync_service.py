# /gradetracker/services/sync_service.py

"""
Reconciles the persistent store with the remote mirrors.

Mirrors are tried strictly in list order ("tier A" first). Remote failures are
logged and recorded for the status indicator, and never propagate: the worst
outcome of any call here is that data stayed local.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from fastapi import Request

from ..core.config import (
    MIRROR_KEY_PREFIX,
    SYNC_PRIMARY_URL,
    SYNC_SECONDARY_URL,
    SYNC_TIMEOUT_SECONDS,
)
from ..core.exceptions import SyncError
from ..models.collections_model import Collections
from ..models.student_model import Student
from ..models.sync_model import SyncReport, SyncStatus, TierResult
from .database_helpers.store_base import Store
from .database_service import DatabaseService
from .seed_data import get_sample_data
from .sync_helpers.backends import RestMirrorBackend, StoreMirrorBackend, SyncBackend

logger = logging.getLogger(__name__)

SOURCE_LOCAL = "local"
SOURCE_SEED = "seed"


def build_default_backends(store: Store) -> List[SyncBackend]:
    """
    Tier A is a REST mirror when SYNC_PRIMARY_URL is set. Tier B is a REST
    mirror when SYNC_SECONDARY_URL is set, otherwise a mirror held in the
    local store.
    """
    backends: List[SyncBackend] = []
    if SYNC_PRIMARY_URL:
        backends.append(RestMirrorBackend("tier-a", SYNC_PRIMARY_URL))
    if SYNC_SECONDARY_URL:
        backends.append(RestMirrorBackend("tier-b", SYNC_SECONDARY_URL))
    else:
        backends.append(StoreMirrorBackend("tier-b", store, MIRROR_KEY_PREFIX))
    return backends


class SyncService:
    def __init__(
        self,
        db: DatabaseService,
        backends: Sequence[SyncBackend],
        timeout: float = SYNC_TIMEOUT_SECONDS,
    ):
        self.db = db
        self.backends = list(backends)
        self.timeout = timeout
        self.source: Optional[str] = None
        self._tier_results: Dict[str, TierResult] = {}

    # --- single guarded calls ---

    def _record(self, name: str, operation: str, error: Optional[str] = None) -> TierResult:
        result = TierResult(
            name=name,
            ok=error is None,
            operation=operation,
            error=error,
            at=datetime.now(timezone.utc).isoformat(),
        )
        self._tier_results[name] = result
        return result

    async def _download(self, backend: SyncBackend) -> Optional[Collections]:
        try:
            data = await asyncio.wait_for(backend.download_all(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Download from %s timed out after %ss", backend.name, self.timeout)
            self._record(backend.name, "download", f"timed out after {self.timeout}s")
            return None
        except SyncError as e:
            logger.warning("Download from %s failed: %s", backend.name, e)
            self._record(backend.name, "download", str(e))
            return None
        except Exception as e:
            logger.exception("Unexpected error downloading from %s", backend.name)
            self._record(backend.name, "download", f"unexpected error: {e}")
            return None
        self._record(backend.name, "download")
        return data

    async def _upload(self, backend: SyncBackend, data: Collections) -> TierResult:
        try:
            await asyncio.wait_for(backend.upload_all(data), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Upload to %s timed out after %ss", backend.name, self.timeout)
            return self._record(backend.name, "upload", f"timed out after {self.timeout}s")
        except SyncError as e:
            logger.warning("Upload to %s failed: %s", backend.name, e)
            return self._record(backend.name, "upload", str(e))
        except Exception as e:
            logger.exception("Unexpected error uploading to %s", backend.name)
            return self._record(backend.name, "upload", f"unexpected error: {e}")
        logger.info("Uploaded %d students to %s", len(data.students), backend.name)
        return self._record(backend.name, "upload")

    # --- precedence chain ---

    async def initialize(self) -> str:
        """
        Startup reconciliation. The first mirror returning a non-empty student
        collection overwrites the store and is replicated (best effort) to the
        mirrors after it. With no usable mirror the store is used as-is, and an
        empty store is seeded with the default dataset.

        Returns the name of the source that won.
        """
        if self.db.is_sync_enabled():
            for index, backend in enumerate(self.backends):
                data = await self._download(backend)
                if data is None:
                    continue
                if data.is_empty():
                    logger.info("%s holds no students, trying next tier", backend.name)
                    continue

                self.db.replace_all(data)
                await asyncio.to_thread(self.db.stamp_last_sync)
                for replica in self.backends[index + 1:]:
                    await self._upload(replica, data)
                self.source = backend.name
                logger.info("Data loaded from %s", backend.name)
                return self.source
        else:
            logger.info("Cloud sync disabled, using the local store")

        if self.db.has_students():
            self.source = SOURCE_LOCAL
        else:
            self.db.replace_all(get_sample_data())
            self.source = SOURCE_SEED
            logger.info("Local store was empty, seeded with the default dataset")
        return self.source

    async def push_all(self) -> SyncReport:
        """
        Explicit "Save": uploads the full current state to every mirror in
        order. Each mirror is attempted regardless of the others' outcome.
        """
        if not self.db.is_sync_enabled():
            logger.info("Cloud sync disabled, changes kept in the local store only")
            return SyncReport()

        data = self.db.snapshot()
        results = [await self._upload(backend, data) for backend in self.backends]
        report = SyncReport(results=results)
        if report.any_succeeded:
            await asyncio.to_thread(self.db.stamp_last_sync)
        return report

    async def lookup_students(self) -> List[Student]:
        """
        Student list for login: mirrors in order, then the local store, then
        the default dataset.
        """
        if self.db.is_sync_enabled():
            for backend in self.backends:
                data = await self._download(backend)
                if data is not None and not data.is_empty():
                    return data.students
        if self.db.has_students():
            return self.db.get_all_students()
        return get_sample_data().students

    # --- status & control ---

    def status(self) -> SyncStatus:
        return SyncStatus(
            enabled=self.db.is_sync_enabled(),
            lastSync=self.db.get_last_sync(),
            source=self.source,
            tiers=[self._tier_results[b.name] for b in self.backends if b.name in self._tier_results],
        )

    def set_enabled(self, enabled: bool) -> SyncStatus:
        self.db.set_sync_enabled(enabled)
        logger.info("Cloud sync %s", "enabled" if enabled else "disabled")
        return self.status()

    def export_backup(self) -> Collections:
        return self.db.snapshot()

    def import_backup(self, data: Collections) -> None:
        """Replaces the local dataset with a backup. Mirrors catch up on the next save."""
        self.db.replace_all(data)


# --- DEPENDENCY PROVIDER ---
def get_sync_service(request: Request) -> SyncService:
    return request.app.state.sync_service
