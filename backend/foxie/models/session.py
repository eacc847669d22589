"""
Session Models - Defines structures for chat sessions and their messages.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from .base import CamelModel

DEFAULT_SESSION_NAME = "New Session"


def _new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserMessage(CamelModel):
    """A turn written by the user."""
    role: Literal["user"] = "user"
    id: str = Field(default_factory=_new_id)
    content: str


class AssistantMessage(CamelModel):
    """A turn generated by the assistant."""
    role: Literal["assistant"] = "assistant"
    id: str = Field(default_factory=_new_id)
    content: str


Message = Annotated[Union[UserMessage, AssistantMessage], Field(discriminator="role")]


class Session(CamelModel):
    """A named, ordered conversation persisted as one document."""
    id: str
    name: str = DEFAULT_SESSION_NAME
    messages: List[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    is_first_ever_session: bool = False

    def to_document(self) -> dict:
        """Document body as stored (the id lives in the document path)."""
        return self.model_dump(by_alias=True, exclude={"id"})


class CreateSessionRequest(CamelModel):
    """Body of POST /sessions."""
    user_id: str = Field(..., min_length=1)


class RenameSessionRequest(CamelModel):
    """Body of PATCH /sessions/{id}."""
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class ChatRequest(CamelModel):
    """Body of POST /chat."""
    session_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    prompt: str = Field(..., min_length=1)


class EditMessageRequest(CamelModel):
    """Body of PUT /sessions/{id}/messages/{index}."""
    user_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class ChatResponse(CamelModel):
    """Result of a message mutation.

    ``bot_reply`` is None when the mutation did not generate a new reply.
    """
    bot_reply: Optional[str] = None
    session: Session


class StatusMessage(CamelModel):
    """Plain acknowledgement."""
    message: str
