"""Services module - provides external service integrations."""

from .cloudinary import CloudinaryBlobStore

__all__ = ['CloudinaryBlobStore']
