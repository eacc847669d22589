"""
Chat API endpoint - send a prompt and receive the assistant's reply.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from ..core import ChatSessionService
from ..models import ChatRequest, ChatResponse
from ..utils.auth import authorize_user, get_token_user_id
from .deps import get_chat_service

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(
    body: ChatRequest,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    service: ChatSessionService = Depends(get_chat_service),
):
    """
    Send a chat message and get the AI response.

    The stored session is the conversation history; the prompt and the
    reply are appended to it together or not at all.

    Returns:
        ChatResponse: the reply text and the updated session
    """
    authorize_user(body.user_id, token_user_id)
    bot_reply, session = await service.send_message(body.session_id, body.user_id, body.prompt)
    return ChatResponse(bot_reply=bot_reply, session=session)
