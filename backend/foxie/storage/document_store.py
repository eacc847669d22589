"""
Document Store - per-user JSON document collections on top of StorageInterface.

Layout: ``users/{user_id}/{collection}/{doc_id}.json``. Timestamp fields are
written as ISO-8601 strings and converted back to datetime objects on read.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any, Iterable

from .interface import StorageInterface, DocumentStore
from ..errors import NotFoundError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


class LocalDocumentStore(DocumentStore):
    """
    Stores each document as one JSON file.
    Storage failures surface as UpstreamUnavailableError.
    """

    def __init__(self, storage: StorageInterface, timestamp_fields: Iterable[str] = DEFAULT_TIMESTAMP_FIELDS):
        """
        Initialize the document store.

        Args:
            storage: Underlying storage implementation (typically LocalStorage)
            timestamp_fields: Fields converted between datetime and ISO strings
        """
        self.storage = storage
        self.timestamp_fields = tuple(timestamp_fields)

    def _collection_path(self, user_id: str, collection: str) -> str:
        for part in (user_id, collection):
            if not part or "/" in part or part.startswith("."):
                raise NotFoundError(f"Invalid document path segment: {part!r}")
        return f"users/{user_id}/{collection}"

    def _doc_path(self, user_id: str, collection: str, doc_id: str) -> str:
        if not doc_id or "/" in doc_id or doc_id.startswith("."):
            raise NotFoundError(f"Invalid document id: {doc_id!r}")
        return f"{self._collection_path(user_id, collection)}/{doc_id}.json"

    def _encode(self, data: Dict[str, Any]) -> str:
        doc = {k: v for k, v in data.items() if k != "id"}
        for key in self.timestamp_fields:
            if isinstance(doc.get(key), datetime):
                doc[key] = doc[key].isoformat()
        return json.dumps(doc, indent=2, ensure_ascii=False)

    def _decode(self, doc_id: str, content: bytes) -> Dict[str, Any]:
        doc = json.loads(content.decode('utf-8'))
        for key in self.timestamp_fields:
            if isinstance(doc.get(key), str):
                doc[key] = datetime.fromisoformat(doc[key])
        doc["id"] = doc_id
        return doc

    async def _read(self, path: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            content = await self.storage.load(path)
            if content is None:
                return None
            return self._decode(doc_id, content)
        except (OSError, ValueError) as e:
            raise UpstreamUnavailableError("Document store read failed", details=str(e)) from e

    async def _write(self, path: str, data: Dict[str, Any]) -> None:
        try:
            await self.storage.save(path, self._encode(data))
        except (OSError, ValueError, TypeError) as e:
            raise UpstreamUnavailableError("Document store write failed", details=str(e)) from e

    async def get(self, user_id: str, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        return await self._read(self._doc_path(user_id, collection, doc_id), doc_id)

    async def list(
        self,
        user_id: str,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        try:
            files = await self.storage.list(self._collection_path(user_id, collection), pattern="*.json")
        except OSError as e:
            raise UpstreamUnavailableError("Document store list failed", details=str(e)) from e

        docs = []
        for file_path in files:
            doc_id = file_path.rsplit("/", 1)[-1][:-len(".json")]
            doc = await self._read(file_path, doc_id)
            # Removed by a concurrent delete since the listing
            if doc is not None:
                docs.append(doc)

        if order_by:
            # Documents lacking the field sort last in either direction
            present = [d for d in docs if d.get(order_by) is not None]
            missing = [d for d in docs if d.get(order_by) is None]
            present.sort(key=lambda d: d[order_by], reverse=descending)
            docs = present + missing

        if limit is not None:
            docs = docs[:limit]
        return docs

    async def add(self, user_id: str, collection: str, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        await self._write(self._doc_path(user_id, collection, doc_id), data)
        logger.debug(f"Added document {collection}/{doc_id} for user {user_id}")
        return doc_id

    async def update(self, user_id: str, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        path = self._doc_path(user_id, collection, doc_id)
        current = await self._read(path, doc_id)
        if current is None:
            raise NotFoundError(f"Document {collection}/{doc_id} not found")
        current.update(data)
        await self._write(path, current)

    async def delete(self, user_id: str, collection: str, doc_id: str) -> bool:
        try:
            return await self.storage.delete(self._doc_path(user_id, collection, doc_id))
        except OSError as e:
            raise UpstreamUnavailableError("Document store delete failed", details=str(e)) from e
