"""
Chat Session Service - session lifecycle and message mutation.

Every operation loads the session document, computes the new message
sequence, optionally asks the completion provider for a reply and then
writes the result back in a single update. Nothing is written when the
completion call fails. Concurrent writers to the same session are not
coordinated: the last update wins.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..errors import NotFoundError, UpstreamUnavailableError, ValidationError
from ..llm.base import LLMProvider, LLMMessage, LLMProviderError
from ..models.session import (
    DEFAULT_SESSION_NAME, AssistantMessage, Message, Session, UserMessage, utcnow,
)
from ..storage.interface import DocumentStore

logger = logging.getLogger(__name__)

SESSIONS_COLLECTION = "chatSessions"
SYSTEM_PROMPT = "You are a helpful assistant."


def _require(value: Optional[str], field: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field} is required.")


def preceding_user_index(messages: List[Message], index: int) -> Optional[int]:
    """Index of the closest user message before ``index``, or None."""
    for i in range(index - 1, -1, -1):
        if isinstance(messages[i], UserMessage):
            return i
    return None


class ChatSessionService:
    """
    Orchestrates chat sessions stored in a DocumentStore.
    """

    def __init__(
        self,
        store: DocumentStore,
        llm_provider: Optional[LLMProvider],
        max_tokens: int = 150,
        temperature: float = 0.7,
    ):
        """
        Initialize the service.

        Args:
            store: Document store holding ``users/{user_id}/chatSessions``
            llm_provider: Completion provider; None if not configured
            max_tokens: Generation length bound for every reply
            temperature: Sampling temperature for every reply
        """
        self.store = store
        self.llm_provider = llm_provider
        self.max_tokens = max_tokens
        self.temperature = temperature

    # Lifecycle

    async def create_session(self, user_id: str) -> Session:
        """
        Create an empty session.

        The first-ever flag comes from a count-then-insert with no
        transaction around it; two simultaneous first sessions can both
        be flagged.
        """
        _require(user_id, "userId")

        existing = await self.store.list(user_id, SESSIONS_COLLECTION, limit=1)
        now = utcnow()
        data = {
            "name": DEFAULT_SESSION_NAME,
            "messages": [],
            "createdAt": now,
            "updatedAt": now,
            "isFirstEverSession": not existing,
        }
        session_id = await self.store.add(user_id, SESSIONS_COLLECTION, data)

        logger.info(
            f"Session created for user {user_id}: {session_id}",
            extra={"extra_fields": {
                "user_id": user_id,
                "session_id": session_id,
                "is_first_ever_session": data["isFirstEverSession"],
            }}
        )
        return Session.model_validate({"id": session_id, **data})

    async def get_session(self, session_id: str, user_id: str) -> Session:
        """Load a session from the user's namespace or raise NotFoundError."""
        _require(user_id, "userId")
        _require(session_id, "sessionId")

        doc = await self.store.get(user_id, SESSIONS_COLLECTION, session_id)
        if doc is None:
            raise NotFoundError("Session not found")
        return Session.model_validate(doc)

    async def list_sessions(self, user_id: str, limit: Optional[int] = None) -> List[Session]:
        """
        List the user's sessions, most recently updated first.

        Args:
            user_id: Namespace owner
            limit: Optional cap (the sidebar asks for 10)
        """
        _require(user_id, "userId")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer.")

        docs = await self.store.list(
            user_id, SESSIONS_COLLECTION, order_by="updatedAt", descending=True, limit=limit
        )
        return [Session.model_validate(doc) for doc in docs]

    async def rename_session(self, session_id: str, user_id: str, name: str) -> Session:
        """Give a session an explicit name."""
        _require(name, "name")
        session = await self.get_session(session_id, user_id)
        updated = session.model_copy(update={
            "name": name.strip(),
            "updated_at": self._next_timestamp(session),
        })
        await self._save(user_id, updated)
        return updated

    async def delete_session(self, session_id: str, user_id: str, missing_ok: bool = False) -> bool:
        """
        Delete a session document.

        Args:
            session_id: Session to delete
            user_id: Namespace owner
            missing_ok: Return False instead of raising when the session is
                already gone (cleanup paths)

        Returns:
            bool: True if a document was deleted

        Raises:
            NotFoundError: If the session does not exist and missing_ok is False
        """
        _require(user_id, "userId")
        _require(session_id, "sessionId")

        deleted = await self.store.delete(user_id, SESSIONS_COLLECTION, session_id)
        if not deleted and not missing_ok:
            raise NotFoundError("Session not found")

        if deleted:
            logger.info(
                f"Session deleted for user {user_id}: {session_id}",
                extra={"extra_fields": {"user_id": user_id, "session_id": session_id}}
            )
        return deleted

    # Message mutation

    async def send_message(self, session_id: str, user_id: str, prompt: str) -> Tuple[str, Session]:
        """
        Append a user prompt and the assistant's reply.

        Returns:
            Tuple of (reply text, updated session)

        Raises:
            NotFoundError: Session does not exist
            UpstreamUnavailableError: Completion failed; nothing was written
        """
        _require(prompt, "prompt")
        session = await self.get_session(session_id, user_id)

        name = session.name
        if (not session.messages and not session.is_first_ever_session
                and session.name == DEFAULT_SESSION_NAME):
            name = prompt
        return await self._regenerate(
            user_id, session, session.messages, UserMessage(content=prompt), name=name
        )

    async def edit_message(
        self, session_id: str, user_id: str, message_index: int, new_text: str
    ) -> Tuple[Optional[str], Session]:
        """
        Replace the text of one message, keeping its id.

        Editing a user message discards everything after it and regenerates
        the reply. Editing an assistant message only replaces its text.
        The session name is never changed here.

        Returns:
            Tuple of (new reply or None, updated session)
        """
        _require(new_text, "content")
        session = await self.get_session(session_id, user_id)
        message = self._message_at(session, message_index)
        edited = message.model_copy(update={"content": new_text})

        if isinstance(edited, UserMessage):
            return await self._regenerate(
                user_id, session, session.messages[:message_index], edited
            )
        if isinstance(edited, AssistantMessage):
            messages = list(session.messages)
            messages[message_index] = edited
            return None, await self._replace_messages(user_id, session, messages)
        raise TypeError(f"Unknown message type: {type(edited).__name__}")

    async def delete_message(
        self, session_id: str, user_id: str, message_index: int
    ) -> Tuple[Optional[str], Session]:
        """
        Remove one message.

        Removing a user message (other than the first) keeps everything
        before it and asks the closest earlier user message again, so the
        result is ``messages[:i] + [repeated prompt, new reply]``. Without an
        earlier user message, or for assistant messages, the sequence just
        loses one entry.

        Returns:
            Tuple of (new reply or None, updated session)
        """
        session = await self.get_session(session_id, user_id)
        message = self._message_at(session, message_index)

        if isinstance(message, UserMessage):
            anchor = preceding_user_index(session.messages, message_index)
            if anchor is not None:
                prompt = UserMessage(content=session.messages[anchor].content)
                return await self._regenerate(
                    user_id, session, session.messages[:message_index], prompt
                )
        elif not isinstance(message, AssistantMessage):
            raise TypeError(f"Unknown message type: {type(message).__name__}")

        remaining = session.messages[:message_index] + session.messages[message_index + 1:]
        return None, await self._replace_messages(user_id, session, remaining)

    # Internals

    def _message_at(self, session: Session, index: int) -> Message:
        if index < 0 or index >= len(session.messages):
            raise NotFoundError(f"Message {index} not found")
        return session.messages[index]

    def _next_timestamp(self, session: Session) -> datetime:
        # updatedAt never moves backwards, even if the clock does
        return max(utcnow(), session.updated_at)

    async def _complete(self, history: List[Message], prompt: str) -> str:
        """Ask the provider for the assistant's next reply."""
        if self.llm_provider is None:
            raise UpstreamUnavailableError(
                "Completion service is not configured",
                details="Set LLM_API_KEY to enable assistant replies."
            )

        messages = [LLMMessage.text("system", SYSTEM_PROMPT)]
        messages.extend(LLMMessage.text(m.role, m.content) for m in history)
        messages.append(LLMMessage.text("user", prompt))

        try:
            response = await self.llm_provider.chat_completion(
                messages, temperature=self.temperature, max_tokens=self.max_tokens
            )
        except LLMProviderError as e:
            raise UpstreamUnavailableError("Completion service unavailable", details=str(e)) from e

        return response.content.strip()

    async def _regenerate(
        self, user_id: str, session: Session, prefix: List[Message], prompt: UserMessage,
        name: Optional[str] = None,
    ) -> Tuple[str, Session]:
        """Replace everything after ``prefix`` with ``prompt`` and a fresh reply."""
        reply = await self._complete(prefix, prompt.content)

        updated = session.model_copy(update={
            "name": name or session.name,
            "messages": [*prefix, prompt, AssistantMessage(content=reply)],
            "updated_at": self._next_timestamp(session),
        })
        await self._save(user_id, updated)
        return reply, updated

    async def _replace_messages(self, user_id: str, session: Session, messages: List[Message]) -> Session:
        updated = session.model_copy(update={
            "messages": messages,
            "updated_at": self._next_timestamp(session),
        })
        await self._save(user_id, updated)
        return updated

    async def _save(self, user_id: str, session: Session) -> None:
        doc = session.to_document()
        await self.store.update(user_id, SESSIONS_COLLECTION, session.id, {
            "name": doc["name"],
            "messages": doc["messages"],
            "updatedAt": doc["updatedAt"],
        })
        logger.debug(f"Session {session.id} saved with {len(session.messages)} messages")
