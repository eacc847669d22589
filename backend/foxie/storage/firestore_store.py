"""
Firestore document store.

Documents live at ``users/{user_id}/{collection}/{doc_id}``, the layout the
web client reads and writes directly. Timestamps are stored as native
Firestore timestamps and come back as datetime objects.
"""

import json
import logging
from typing import Optional, List, Dict, Any

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from .interface import DocumentStore
from ..errors import NotFoundError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "foxie"


def create_firestore_client(service_account_json: Optional[str] = None,
                            project_id: Optional[str] = None):
    """
    Initialize (once) the Firebase app and return its async Firestore client.

    Args:
        service_account_json: Service account key as a JSON string; when
            empty, Application Default Credentials are used
        project_id: Optional project override

    Returns:
        google.cloud.firestore.AsyncClient
    """
    try:
        app = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        if service_account_json:
            info = json.loads(service_account_json)
            # Keys pasted into env vars often carry escaped newlines
            if "private_key" in info:
                info["private_key"] = info["private_key"].replace("\\n", "\n")
            cred = credentials.Certificate(info)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": project_id} if project_id else None
        app = firebase_admin.initialize_app(cred, options, name=FIREBASE_APP_NAME)
        logger.info("Firebase Admin SDK initialized")
    return firestore_async.client(app)


class FirestoreDocumentStore(DocumentStore):
    """
    DocumentStore over the Firestore async client.
    API failures surface as UpstreamUnavailableError.
    """

    def __init__(self, client):
        """
        Args:
            client: ``google.cloud.firestore.AsyncClient``
        """
        self.client = client

    def _collection(self, user_id: str, collection: str):
        for part in (user_id, collection):
            if not part or "/" in part:
                raise NotFoundError(f"Invalid document path segment: {part!r}")
        return self.client.collection("users").document(user_id).collection(collection)

    def _document(self, user_id: str, collection: str, doc_id: str):
        if not doc_id or "/" in doc_id:
            raise NotFoundError(f"Invalid document id: {doc_id!r}")
        return self._collection(user_id, collection).document(doc_id)

    @staticmethod
    def _to_dict(snapshot) -> Dict[str, Any]:
        doc = snapshot.to_dict() or {}
        doc["id"] = snapshot.id
        return doc

    async def get(self, user_id: str, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ref = self._document(user_id, collection, doc_id)
        try:
            snapshot = await ref.get()
        except gcp_exceptions.GoogleAPICallError as e:
            raise UpstreamUnavailableError("Document store read failed", details=str(e)) from e
        if not snapshot.exists:
            return None
        return self._to_dict(snapshot)

    async def list(
        self,
        user_id: str,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        # Firestore leaves out documents lacking the order_by field
        query = self._collection(user_id, collection)
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        try:
            return [self._to_dict(snapshot) async for snapshot in query.stream()]
        except gcp_exceptions.GoogleAPICallError as e:
            raise UpstreamUnavailableError("Document store list failed", details=str(e)) from e

    async def add(self, user_id: str, collection: str, data: Dict[str, Any]) -> str:
        body = {k: v for k, v in data.items() if k != "id"}
        try:
            _, ref = await self._collection(user_id, collection).add(body)
        except gcp_exceptions.GoogleAPICallError as e:
            raise UpstreamUnavailableError("Document store write failed", details=str(e)) from e
        logger.debug(f"Added document {collection}/{ref.id} for user {user_id}")
        return ref.id

    async def update(self, user_id: str, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        ref = self._document(user_id, collection, doc_id)
        try:
            await ref.update(data)
        except gcp_exceptions.NotFound as e:
            raise NotFoundError(f"Document {collection}/{doc_id} not found") from e
        except gcp_exceptions.GoogleAPICallError as e:
            raise UpstreamUnavailableError("Document store write failed", details=str(e)) from e

    async def delete(self, user_id: str, collection: str, doc_id: str) -> bool:
        ref = self._document(user_id, collection, doc_id)
        try:
            await ref.delete(option=self.client.write_option(exists=True))
        except gcp_exceptions.NotFound:
            return False
        except gcp_exceptions.GoogleAPICallError as e:
            raise UpstreamUnavailableError("Document store delete failed", details=str(e)) from e
        return True
