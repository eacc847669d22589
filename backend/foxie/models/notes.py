"""
Note and File Models - attachment reconciliation and file deletion.
"""

from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class SyncNotesRequest(CamelModel):
    """Body of POST /notes/sync."""
    user_id: str = Field(..., min_length=1)


class SyncError(CamelModel):
    """A note that could not be checked."""
    note_id: str
    error: str


class SyncResult(CamelModel):
    """Tally of one reconciliation sweep."""
    synced: int = 0
    removed: int = 0
    errors: List[SyncError] = Field(default_factory=list)


class DeleteFileRequest(CamelModel):
    """Body of POST /files/delete."""
    public_id: str = Field(..., min_length=1)
    resource_type: Optional[str] = None
    file_type: Optional[str] = None  # MIME type, used when resource_type is absent
    file_size: Optional[int] = Field(None, ge=0)  # bytes


class DeleteFileResponse(CamelModel):
    """Outcome of a file deletion."""
    status: str = "success"
    message: str
