"""
Unit tests for FileService and resource type resolution.
"""

import pytest
from unittest.mock import AsyncMock

from foxie.core import FileService, resolve_resource_type
from foxie.errors import UpstreamUnavailableError, ValidationError
from foxie.storage.interface import BlobStore


class TestResolveResourceType:
    """Tests for resolve_resource_type."""

    def test_explicit_type_wins(self):
        assert resolve_resource_type("video", "application/pdf") == "video"

    def test_documents_are_raw(self):
        assert resolve_resource_type(None, "application/pdf") == "raw"
        assert resolve_resource_type(None, "application/vnd.ms-excel") == "raw"

    def test_everything_else_is_image(self):
        assert resolve_resource_type(None, "image/png") == "image"
        assert resolve_resource_type() == "image"


class TestDeleteFile:
    """Tests for FileService.delete_file."""

    @pytest.mark.asyncio
    async def test_deletes_existing_file(self, blob_store):
        await blob_store.put("notes/scan", b"pdf", resource_type="raw")
        service = FileService(blob_store)

        result = await service.delete_file("notes/scan", file_type="application/pdf")

        assert result.status == "success"
        assert result.message == "File deleted successfully"
        assert await blob_store.exists("notes/scan", "raw") is False

    @pytest.mark.asyncio
    async def test_missing_file_is_success(self, blob_store):
        result = await FileService(blob_store).delete_file("never-uploaded")
        assert result.status == "success"
        assert result.message == "File not found, no action taken"

    @pytest.mark.asyncio
    async def test_size_limit(self, blob_store):
        service = FileService(blob_store)
        with pytest.raises(ValidationError) as exc_info:
            await service.delete_file("big", file_size=10 * 1024 * 1024 + 1)
        assert exc_info.value.details == "Maximum file size is 10MB"

        await blob_store.put("exact", b"x")
        result = await service.delete_file("exact", file_size=10 * 1024 * 1024)
        assert result.message == "File deleted successfully"

    @pytest.mark.asyncio
    async def test_refused_destroy(self):
        blob_store = AsyncMock(spec=BlobStore)
        blob_store.exists.return_value = True
        blob_store.destroy.return_value = False

        with pytest.raises(UpstreamUnavailableError):
            await FileService(blob_store).delete_file("stuck", resource_type="image")
        blob_store.destroy.assert_awaited_once_with("stuck", "image")

    @pytest.mark.asyncio
    async def test_missing_public_id(self, blob_store):
        with pytest.raises(ValidationError):
            await FileService(blob_store).delete_file("")
