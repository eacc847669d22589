"""
File Service - deletes uploaded files from the blob store.
"""

import logging
from typing import Optional

from ..errors import UpstreamUnavailableError, ValidationError
from ..models.notes import DeleteFileResponse
from ..storage.interface import BlobStore

logger = logging.getLogger(__name__)


def resolve_resource_type(resource_type: Optional[str] = None, file_type: Optional[str] = None) -> str:
    """
    Pick the blob store resource type for a file.

    An explicit ``resource_type`` wins. Otherwise documents
    (``application/*`` MIME types, PDFs included) are "raw" and everything
    else is "image".
    """
    if resource_type:
        return resource_type
    if file_type and file_type.startswith("application/"):
        return "raw"
    return "image"


class FileService:
    """Deletes files, treating an already-absent file as success."""

    def __init__(self, blob_store: BlobStore, max_file_size: int = 10 * 1024 * 1024):
        self.blob_store = blob_store
        self.max_file_size = max_file_size

    async def delete_file(
        self,
        public_id: str,
        resource_type: Optional[str] = None,
        file_type: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> DeleteFileResponse:
        """
        Delete one file.

        Args:
            public_id: Blob store id of the file
            resource_type: Explicit resource type hint
            file_type: MIME type, used when no resource type is given
            file_size: Reported size in bytes, checked against the upload limit

        Returns:
            DeleteFileResponse describing what happened

        Raises:
            ValidationError: Missing id or size above the limit
            UpstreamUnavailableError: The blob store refused the deletion
        """
        if not public_id:
            raise ValidationError("publicId is required.")
        if file_size is not None and file_size > self.max_file_size:
            raise ValidationError(
                "File size exceeds limit",
                details=f"Maximum file size is {self.max_file_size // (1024 * 1024)}MB"
            )

        kind = resolve_resource_type(resource_type, file_type)

        if not await self.blob_store.exists(public_id, kind):
            logger.warning(f"File {kind}/{public_id} not found, skipping deletion")
            return DeleteFileResponse(message="File not found, no action taken")

        if not await self.blob_store.destroy(public_id, kind):
            raise UpstreamUnavailableError(f"Failed to delete file {public_id}")

        return DeleteFileResponse(message="File deleted successfully")
