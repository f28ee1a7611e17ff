# /gradetracker/routers/sync_router.py

from fastapi import APIRouter, Depends

from ..models.collections_model import Collections
from ..models.sync_model import SyncEnabledUpdate, SyncReport, SyncStatus
from ..services.sync_service import SyncService, get_sync_service

router = APIRouter()


@router.get("/status", response_model=SyncStatus, summary="Get Cloud Sync Status")
def get_sync_status(sync: SyncService = Depends(get_sync_service)):
    return sync.status()

@router.post("/save", response_model=SyncReport, summary="Push All Data to the Mirrors")
async def save_to_mirrors(sync: SyncService = Depends(get_sync_service)):
    # Per-tier failures are reported in the body; the request itself succeeds.
    return await sync.push_all()

@router.put("/enabled", response_model=SyncStatus, summary="Enable or Disable Cloud Sync")
def set_sync_enabled(update: SyncEnabledUpdate, sync: SyncService = Depends(get_sync_service)):
    return sync.set_enabled(update.enabled)

@router.get("/export", response_model=Collections, summary="Download a Full Backup")
def export_backup(sync: SyncService = Depends(get_sync_service)):
    return sync.export_backup()

@router.post("/import", response_model=SyncStatus, summary="Restore a Full Backup")
def import_backup(backup: Collections, sync: SyncService = Depends(get_sync_service)):
    sync.import_backup(backup)
    return sync.status()
