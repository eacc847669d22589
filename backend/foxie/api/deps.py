"""
Request-scoped dependencies.

Collaborators are built from settings on every request; only the Firebase
app behind the Firestore client is created once per process. Tests replace
these through ``app.dependency_overrides``.
"""

from typing import Optional
from fastapi import Depends

from ..config import settings
from ..core import ChatSessionService, FileService, NotesSyncService
from ..errors import UpstreamUnavailableError
from ..llm.base import LLMProvider
from ..llm.factory import create_llm_provider
from ..services.cloudinary import CloudinaryBlobStore
from ..storage import (
    BlobStore, DocumentStore, FirestoreDocumentStore, LocalBlobStore, LocalDocumentStore,
    LocalStorage, create_firestore_client,
)


def get_document_store() -> DocumentStore:
    """Document store for the configured storage type."""
    if settings.storage_type == "firestore":
        return FirestoreDocumentStore(create_firestore_client(
            settings.firebase_service_account, settings.firebase_project_id
        ))
    if settings.storage_type == "local":
        return LocalDocumentStore(LocalStorage(settings.local_storage_path))
    raise ValueError(f"Unsupported storage type: {settings.storage_type}")


def get_blob_store() -> BlobStore:
    """Blob store for the configured file storage."""
    if settings.blob_store_type == "cloudinary":
        if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key
                and settings.cloudinary_api_secret):
            raise UpstreamUnavailableError(
                "File storage is not configured",
                details="Set CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET."
            )
        return CloudinaryBlobStore(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    if settings.blob_store_type == "local":
        return LocalBlobStore(LocalStorage(settings.local_storage_path))
    raise ValueError(f"Unsupported blob store type: {settings.blob_store_type}")


def get_llm_provider() -> Optional[LLMProvider]:
    """Get configured LLM provider or None."""
    api_key = settings.llm_api_key or settings.openai_api_key
    if not api_key:
        return None
    return create_llm_provider(
        provider=settings.llm_provider,
        api_key=api_key,
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout,
    )


def get_chat_service(
    store: DocumentStore = Depends(get_document_store),
    llm_provider: Optional[LLMProvider] = Depends(get_llm_provider),
) -> ChatSessionService:
    return ChatSessionService(
        store,
        llm_provider,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )


def get_notes_sync_service(
    store: DocumentStore = Depends(get_document_store),
    blob_store: BlobStore = Depends(get_blob_store),
) -> NotesSyncService:
    return NotesSyncService(store, blob_store)


def get_file_service(blob_store: BlobStore = Depends(get_blob_store)) -> FileService:
    return FileService(blob_store, max_file_size=settings.max_file_size)
