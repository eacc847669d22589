"""Models module."""

from .session import (
    DEFAULT_SESSION_NAME, UserMessage, AssistantMessage, Message, Session,
    CreateSessionRequest, RenameSessionRequest, ChatRequest, EditMessageRequest,
    ChatResponse, StatusMessage,
)
from .notes import SyncNotesRequest, SyncError, SyncResult, DeleteFileRequest, DeleteFileResponse

__all__ = [
    'DEFAULT_SESSION_NAME', 'UserMessage', 'AssistantMessage', 'Message', 'Session',
    'CreateSessionRequest', 'RenameSessionRequest', 'ChatRequest', 'EditMessageRequest',
    'ChatResponse', 'StatusMessage',
    'SyncNotesRequest', 'SyncError', 'SyncResult', 'DeleteFileRequest', 'DeleteFileResponse',
]
