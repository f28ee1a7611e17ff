# /gradetracker/models/sync_model.py

from typing import List, Optional

from pydantic import BaseModel, Field


class TierResult(BaseModel):
    """Outcome of the most recent call against one mirror."""
    name: str
    ok: bool
    operation: str = Field(..., description="'upload' or 'download'.")
    error: Optional[str] = None
    at: Optional[str] = None


class SyncReport(BaseModel):
    results: List[TierResult] = Field(default_factory=list)

    @property
    def any_succeeded(self) -> bool:
        return any(r.ok for r in self.results)


class SyncStatus(BaseModel):
    """Non-blocking status indicator for the admin UI."""
    enabled: bool
    lastSync: Optional[str] = None
    source: Optional[str] = Field(default=None, description="Where the data came from at startup.")
    tiers: List[TierResult] = Field(default_factory=list)


class SyncEnabledUpdate(BaseModel):
    enabled: bool
