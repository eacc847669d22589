"""
File API endpoints.
"""

from fastapi import APIRouter, Depends

from ..core import FileService
from ..models import DeleteFileRequest, DeleteFileResponse
from .deps import get_file_service

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/delete", response_model=DeleteFileResponse)
async def delete_file(
    body: DeleteFileRequest,
    service: FileService = Depends(get_file_service),
):
    """Delete an uploaded file. A file that is already gone counts as deleted."""
    return await service.delete_file(
        body.public_id,
        resource_type=body.resource_type,
        file_type=body.file_type,
        file_size=body.file_size,
    )
