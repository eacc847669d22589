"""
Notes Sync - reconcile note documents with the files they point at.
"""

import logging

from ..errors import FoxieError, ValidationError
from ..models.notes import SyncError, SyncResult
from ..storage.interface import BlobStore, DocumentStore

logger = logging.getLogger(__name__)

NOTES_COLLECTION = "notes"
DEFAULT_RESOURCE_TYPE = "image"


class NotesSyncService:
    """Removes notes whose uploaded file no longer exists."""

    def __init__(self, store: DocumentStore, blob_store: BlobStore):
        self.store = store
        self.blob_store = blob_store

    async def sync_attachments(self, user_id: str) -> SyncResult:
        """
        Check every note of a user against the blob store.

        A failure on one note is recorded in ``errors`` and the sweep moves
        on to the next note.

        Args:
            user_id: Owner of the notes

        Returns:
            SyncResult: counts of synced and removed notes plus per-note errors
        """
        if not user_id or not user_id.strip():
            raise ValidationError("userId is required.")

        notes = await self.store.list(user_id, NOTES_COLLECTION)
        result = SyncResult()

        for note in notes:
            note_id = note["id"]
            try:
                public_id = note.get("publicId")
                if not public_id:
                    raise ValidationError("Note has no publicId")
                resource_type = note.get("resourceType") or DEFAULT_RESOURCE_TYPE

                if await self.blob_store.exists(public_id, resource_type):
                    result.synced += 1
                else:
                    await self.store.delete(user_id, NOTES_COLLECTION, note_id)
                    result.removed += 1
                    logger.info(f"Removed note {note_id}: file {public_id} no longer exists")
            except FoxieError as e:
                logger.warning(f"Failed to sync note {note_id}: {e.message}")
                result.errors.append(SyncError(note_id=note_id, error=e.message))

        logger.info(
            f"Notes sync finished for user {user_id}",
            extra={"extra_fields": {
                "user_id": user_id,
                "synced": result.synced,
                "removed": result.removed,
                "errors": len(result.errors),
            }}
        )
        return result
