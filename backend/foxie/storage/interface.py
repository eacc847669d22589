"""
Storage interfaces.

``StorageInterface`` is the raw byte/text store behind the local stores.
``DocumentStore`` is the per-user document collection contract the services
rely on; ``BlobStore`` is the uploaded-file contract.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class StorageInterface(ABC):
    """Path-addressed content storage."""

    @abstractmethod
    async def save(self, path: str, content: bytes | str) -> None:
        """
        Save content to the specified path, creating parent directories.

        Args:
            path: Relative path (e.g., "users/123/chatSessions/abc.json")
            content: bytes for binary files or str for text
        """
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """Load content, or None if nothing is stored at ``path``."""
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a file exists at the specified path."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Delete the file at ``path``; False if it did not exist."""
        pass

    @abstractmethod
    async def list(self, path: str, pattern: Optional[str] = None) -> List[str]:
        """
        List files directly under a directory.

        Args:
            path: Directory path to list
            pattern: Optional glob pattern (e.g., "*.json")

        Returns:
            List[str]: Sorted relative file paths
        """
        pass


class DocumentStore(ABC):
    """
    Per-user namespaced document collections.

    Documents are plain dicts; every returned document carries its ``id``.
    """

    @abstractmethod
    async def get(self, user_id: str, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document or None if it does not exist."""
        pass

    @abstractmethod
    async def list(
        self,
        user_id: str,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        List documents of a collection.

        Args:
            user_id: Namespace owner
            collection: Collection name
            order_by: Optional field to sort on
            descending: Sort direction for ``order_by``
            limit: Optional maximum number of documents

        Returns:
            List of documents
        """
        pass

    @abstractmethod
    async def add(self, user_id: str, collection: str, data: Dict[str, Any]) -> str:
        """Insert a new document and return its server-assigned id."""
        pass

    @abstractmethod
    async def update(self, user_id: str, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """
        Merge ``data`` into an existing document.

        Raises:
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, collection: str, doc_id: str) -> bool:
        """Delete a document; False if it did not exist."""
        pass


class BlobStore(ABC):
    """Uploaded files addressed by an opaque public id and a resource type."""

    @abstractmethod
    async def exists(self, public_id: str, resource_type: str = "image") -> bool:
        """Check whether the file is still stored."""
        pass

    @abstractmethod
    async def destroy(self, public_id: str, resource_type: str = "image") -> bool:
        """Delete the file; True when the store confirms the deletion."""
        pass
