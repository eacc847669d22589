"""
Local Filesystem Storage Implementation.
This implementation stores all data on the server's local filesystem.
"""

import logging
import aiofiles
from pathlib import Path
from typing import Optional, List

from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.
    Stores all data in a base directory on the server.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored files
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        """Convert relative path to full absolute path within base directory."""
        full_path = (self.base_dir / path).resolve()

        if not full_path.is_relative_to(self.base_dir):
            raise ValueError(f"Invalid path: {path} - path traversal detected")

        return full_path

    async def save(self, path: str, content: bytes | str) -> None:
        """Save content to local filesystem."""
        full_path = self._get_full_path(path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                async with aiofiles.open(full_path, 'w', encoding='utf-8') as f:
                    await f.write(content)
            else:
                async with aiofiles.open(full_path, 'wb') as f:
                    await f.write(content)
        except OSError as e:
            logger.error(f"Error saving file {path}: {e}")
            raise

    async def load(self, path: str) -> Optional[bytes]:
        """Load content from local filesystem."""
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            return None

        try:
            async with aiofiles.open(full_path, 'rb') as f:
                return await f.read()
        except FileNotFoundError:
            # Deleted between the check and the read
            return None
        except OSError as e:
            logger.error(f"Error loading file {path}: {e}")
            raise

    async def exists(self, path: str) -> bool:
        """Check if file exists."""
        return self._get_full_path(path).is_file()

    async def delete(self, path: str) -> bool:
        """Delete file from local filesystem."""
        full_path = self._get_full_path(path)
        try:
            full_path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Error deleting file {path}: {e}")
            raise

    async def list(self, path: str, pattern: Optional[str] = None) -> List[str]:
        """List files in directory."""
        full_path = self._get_full_path(path)
        if not full_path.is_dir():
            return []

        files = [p for p in full_path.glob(pattern or "*") if p.is_file()]
        return sorted(str(p.relative_to(self.base_dir)) for p in files)
