"""Storage module - provides interfaces and implementations for data persistence."""

from .interface import StorageInterface, DocumentStore, BlobStore
from .local_storage import LocalStorage
from .document_store import LocalDocumentStore
from .firestore_store import FirestoreDocumentStore, create_firestore_client
from .blob_store import LocalBlobStore

__all__ = [
    'StorageInterface', 'DocumentStore', 'BlobStore',
    'LocalStorage', 'LocalDocumentStore', 'LocalBlobStore',
    'FirestoreDocumentStore', 'create_firestore_client',
]
