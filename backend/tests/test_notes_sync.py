"""
Unit tests for NotesSyncService.
"""

import pytest
from unittest.mock import AsyncMock

from foxie.core import NotesSyncService
from foxie.core.notes_sync import NOTES_COLLECTION
from foxie.errors import UpstreamUnavailableError, ValidationError
from foxie.storage.interface import BlobStore


@pytest.fixture
def sync_service(document_store, blob_store):
    return NotesSyncService(document_store, blob_store)


class TestSyncAttachments:
    """Tests for the attachment reconciliation sweep."""

    @pytest.mark.asyncio
    async def test_removes_notes_with_missing_files(self, sync_service, document_store, blob_store):
        await blob_store.put("lecture-1", b"png")
        await blob_store.put("syllabus", b"pdf", resource_type="raw")

        kept_image = await document_store.add("u1", NOTES_COLLECTION, {"publicId": "lecture-1"})
        kept_raw = await document_store.add(
            "u1", NOTES_COLLECTION, {"publicId": "syllabus", "resourceType": "raw"}
        )
        orphan = await document_store.add("u1", NOTES_COLLECTION, {"publicId": "deleted-upload"})

        result = await sync_service.sync_attachments("u1")

        assert result.synced == 2
        assert result.removed == 1
        assert result.errors == []

        remaining = {d["id"] for d in await document_store.list("u1", NOTES_COLLECTION)}
        assert remaining == {kept_image, kept_raw}
        assert orphan not in remaining

    @pytest.mark.asyncio
    async def test_resource_type_defaults_to_image(self, sync_service, document_store, blob_store):
        # Stored as raw but the note carries no hint, so the image lookup misses
        await blob_store.put("report", b"pdf", resource_type="raw")
        await document_store.add("u1", NOTES_COLLECTION, {"publicId": "report"})

        result = await sync_service.sync_attachments("u1")
        assert result.removed == 1

    @pytest.mark.asyncio
    async def test_note_without_public_id_is_reported(self, sync_service, document_store, blob_store):
        await blob_store.put("ok", b"png")
        await document_store.add("u1", NOTES_COLLECTION, {"publicId": "ok"})
        broken = await document_store.add("u1", NOTES_COLLECTION, {"title": "draft"})

        result = await sync_service.sync_attachments("u1")

        assert result.synced == 1
        assert result.removed == 0
        assert len(result.errors) == 1
        assert result.errors[0].note_id == broken
        # The broken note is left in place
        assert await document_store.get("u1", NOTES_COLLECTION, broken) is not None

    @pytest.mark.asyncio
    async def test_blob_store_failure_does_not_stop_sweep(self, document_store):
        blob_store = AsyncMock(spec=BlobStore)
        blob_store.exists.side_effect = [
            UpstreamUnavailableError("Failed to look up file a"),
            True,
        ]
        await document_store.add("u1", NOTES_COLLECTION, {"publicId": "a"})
        await document_store.add("u1", NOTES_COLLECTION, {"publicId": "b"})

        result = await NotesSyncService(document_store, blob_store).sync_attachments("u1")

        assert result.synced == 1
        assert len(result.errors) == 1
        assert result.errors[0].error.startswith("Failed to look up file")

    @pytest.mark.asyncio
    async def test_no_notes(self, sync_service):
        result = await sync_service.sync_attachments("u1")
        assert (result.synced, result.removed, result.errors) == (0, 0, [])

    @pytest.mark.asyncio
    async def test_missing_user_id(self, sync_service):
        with pytest.raises(ValidationError):
            await sync_service.sync_attachments("")
