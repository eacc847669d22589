"""API module."""

from .sessions import router as sessions_router
from .chat import router as chat_router
from .notes import router as notes_router
from .files import router as files_router
from .errors import register_exception_handlers

__all__ = ['sessions_router', 'chat_router', 'notes_router', 'files_router', 'register_exception_handlers']
