"""
Session API endpoints - session lifecycle and message edits.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status

from ..core import ChatSessionService
from ..models import (
    ChatResponse, CreateSessionRequest, EditMessageRequest, RenameSessionRequest,
    Session, StatusMessage,
)
from ..utils.auth import authorize_user, get_token_user_id
from .deps import get_chat_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=Session, status_code=status.HTTP_201_CREATED)
async def create_session(
    body: CreateSessionRequest,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """Create an empty chat session for the user."""
    authorize_user(body.user_id, token_user_id)
    return await service.create_session(body.user_id)


@router.get("", response_model=List[Session])
async def list_sessions(
    user_id: str = Query(..., alias="userId", min_length=1),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of sessions"),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """
    List the user's sessions, most recently updated first.

    Args:
        user_id: Owner of the sessions
        limit: Optional cap, e.g. 10 for the sidebar
    """
    authorize_user(user_id, token_user_id)
    return await service.list_sessions(user_id, limit=limit)


@router.get("/{session_id}", response_model=Session)
async def get_session(
    session_id: str,
    user_id: str = Query(..., alias="userId", min_length=1),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """Fetch a single session with its messages."""
    authorize_user(user_id, token_user_id)
    return await service.get_session(session_id, user_id)


@router.patch("/{session_id}", response_model=Session)
async def rename_session(
    session_id: str,
    body: RenameSessionRequest,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """Rename a session."""
    authorize_user(body.user_id, token_user_id)
    return await service.rename_session(session_id, body.user_id, body.name)


@router.delete("/{session_id}", response_model=StatusMessage)
async def delete_session(
    session_id: str,
    user_id: str = Query(..., alias="userId", min_length=1),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """Delete a session; 404 if it does not exist."""
    authorize_user(user_id, token_user_id)
    await service.delete_session(session_id, user_id)
    return StatusMessage(message="Session deleted successfully")


@router.put("/{session_id}/messages/{message_index}", response_model=ChatResponse)
async def edit_message(
    session_id: str,
    body: EditMessageRequest,
    message_index: int = Path(..., ge=0),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """
    Edit a message in place.

    Editing a user message regenerates the assistant reply and discards
    the rest of the conversation.
    """
    authorize_user(body.user_id, token_user_id)
    bot_reply, session = await service.edit_message(
        session_id, body.user_id, message_index, body.content
    )
    return ChatResponse(bot_reply=bot_reply, session=session)


@router.delete("/{session_id}/messages/{message_index}", response_model=ChatResponse)
async def delete_message(
    session_id: str,
    message_index: int = Path(..., ge=0),
    user_id: str = Query(..., alias="userId", min_length=1),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """Delete a message, regenerating the reply when a user turn is removed."""
    authorize_user(user_id, token_user_id)
    bot_reply, session = await service.delete_message(session_id, user_id, message_index)
    return ChatResponse(bot_reply=bot_reply, session=session)
