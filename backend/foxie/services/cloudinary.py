"""
Cloudinary blob store.
Uses the Cloudinary SDK: Admin API ``resource`` for existence checks and the
Upload API ``destroy`` for deletion. The SDK is synchronous, so every call
runs in a worker thread.
"""

import asyncio
import logging
from typing import Dict, Any

import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError, NotFound

from ..errors import UpstreamUnavailableError
from ..storage.interface import BlobStore

logger = logging.getLogger(__name__)


class CloudinaryBlobStore(BlobStore):
    """
    BlobStore for files uploaded to Cloudinary.
    Credentials are passed per call, so no global SDK configuration is needed.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str,
                 timeout: float = 30.0):
        """
        Initialize the Cloudinary client.

        Args:
            cloud_name: Cloudinary cloud name
            api_key: API key
            api_secret: API secret
            timeout: Per-request timeout in seconds
        """
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def _options(self, resource_type: str) -> Dict[str, Any]:
        return {
            "resource_type": resource_type,
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
        }

    async def exists(self, public_id: str, resource_type: str = "image") -> bool:
        try:
            await asyncio.to_thread(cloudinary.api.resource, public_id, **self._options(resource_type))
        except NotFound:
            return False
        except CloudinaryError as e:
            raise UpstreamUnavailableError(
                f"Failed to look up file {public_id}", details=str(e)
            ) from e
        return True

    async def destroy(self, public_id: str, resource_type: str = "image") -> bool:
        try:
            data = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id, **self._options(resource_type)
            )
        except CloudinaryError as e:
            raise UpstreamUnavailableError(
                f"Failed to delete file {public_id}", details=str(e)
            ) from e

        result = data.get("result") if isinstance(data, dict) else None
        logger.info(
            f"Cloudinary destroy {resource_type}/{public_id}: {result}",
            extra={"extra_fields": {"public_id": public_id, "resource_type": resource_type, "result": result}}
        )
        return result == "ok"
