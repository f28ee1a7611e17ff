# /gradetracker/routers/mirror_router.py

"""
Serves this deployment as a remote mirror for other deployments, implementing
the contract `RestMirrorBackend` speaks. Mirror data lives under
MIRROR_SERVE_PREFIX, apart from both the live collections and the local
tier B mirror, so nothing uploaded here is ever loaded as this deployment's data.
"""

from fastapi import APIRouter, HTTPException, Request, status

from ..core.exceptions import SyncError
from ..models.collections_model import Collections

router = APIRouter()


@router.get("", response_model=Collections, summary="Download the Mirrored Dataset")
async def download_mirror(request: Request):
    try:
        return await request.app.state.mirror.download_all()
    except SyncError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

@router.put("", status_code=status.HTTP_204_NO_CONTENT, summary="Replace the Mirrored Dataset")
async def upload_mirror(data: Collections, request: Request):
    try:
        await request.app.state.mirror.upload_all(data)
    except SyncError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
