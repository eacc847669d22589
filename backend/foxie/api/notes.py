"""
Notes API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from ..core import NotesSyncService
from ..models import SyncNotesRequest, SyncResult
from ..utils.auth import authorize_user, get_token_user_id
from .deps import get_notes_sync_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/sync", response_model=SyncResult)
async def sync_notes(
    body: SyncNotesRequest,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: NotesSyncService = Depends(get_notes_sync_service),
):
    """Drop notes whose file is gone; per-note failures are reported, not raised."""
    authorize_user(body.user_id, token_user_id)
    return await service.sync_attachments(body.user_id)
