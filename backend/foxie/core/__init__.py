"""Core module - session, notes and file business logic."""

from .chat_sessions import ChatSessionService
from .notes_sync import NotesSyncService
from .files import FileService, resolve_resource_type

__all__ = ['ChatSessionService', 'NotesSyncService', 'FileService', 'resolve_resource_type']
