"""
Local blob store - keeps uploaded files under ``files/{resource_type}/``.
Used in development and tests in place of Cloudinary.
"""

import logging

from .interface import StorageInterface, BlobStore
from ..errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """BlobStore backed by a StorageInterface."""

    def __init__(self, storage: StorageInterface, prefix: str = "files"):
        self.storage = storage
        self.prefix = prefix

    def _blob_path(self, public_id: str, resource_type: str) -> str:
        return f"{self.prefix}/{resource_type}/{public_id}"

    async def put(self, public_id: str, content: bytes, resource_type: str = "image") -> None:
        """Store a file (uploads happen client-side in production)."""
        await self.storage.save(self._blob_path(public_id, resource_type), content)

    async def exists(self, public_id: str, resource_type: str = "image") -> bool:
        try:
            return await self.storage.exists(self._blob_path(public_id, resource_type))
        except ValueError as e:
            raise UpstreamUnavailableError(f"Invalid public id: {public_id}", details=str(e)) from e

    async def destroy(self, public_id: str, resource_type: str = "image") -> bool:
        try:
            deleted = await self.storage.delete(self._blob_path(public_id, resource_type))
        except (OSError, ValueError) as e:
            raise UpstreamUnavailableError(f"Failed to delete file {public_id}", details=str(e)) from e
        if deleted:
            logger.info(f"Deleted local file {resource_type}/{public_id}")
        return deleted
