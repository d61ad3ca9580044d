"""
Conversation Store.

Single-writer store for the conversation list. Every mutation addresses a
conversation by ID and is followed by a synchronous flush of the whole list
to storage under one key. The list is read from storage once, on load().
"""

from __future__ import annotations

import json
import time
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from chatty.core.exceptions import InfrastructureError, NotFoundError
from chatty.core.logger import setup_logger
from chatty.interfaces.storage_provider import IStorageProvider
from chatty.models.conversation import (
    DEFAULT_TITLE,
    Attachment,
    Conversation,
    ConversationSummary,
    Message,
    derive_title,
)
from chatty.models.enums import MessageRole, Sentiment

logger = setup_logger(__name__)


def timestamp_id() -> str:
    """Millisecond timestamp identifier."""
    return str(int(time.time() * 1000))


class ConversationStore:
    """In-memory conversation list mirrored to a storage provider."""

    def __init__(
        self,
        storage: IStorageProvider,
        storage_key: str,
        id_factory: Callable[[], str] = timestamp_id,
    ):
        self._storage = storage
        self._storage_key = storage_key
        self._id_factory = id_factory
        self._conversations: list[Conversation] = []
        self._active_id: Optional[str] = None
        self.last_persist_error: Optional[InfrastructureError] = None

    # ===========================================
    # Persistence
    # ===========================================

    async def load(self) -> list[Conversation]:
        """
        Restore the conversation list from storage.

        Unreadable or unparseable state starts an empty list; the stored value
        is left untouched until the next mutation.
        """
        self._conversations = []
        self._active_id = None
        try:
            raw = await self._storage.read(self._storage_key)
        except InfrastructureError as e:
            logger.error(f"Failed to load conversations: {e}")
            return []

        if not raw:
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("stored conversations must be a JSON array")
            self._conversations = [Conversation.model_validate(record) for record in records]
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable conversation state: {e}")
            self._conversations = []

        logger.info(f"Loaded {len(self._conversations)} conversations")
        return self.list_conversations()

    def serialize(self) -> str:
        """Serialize the full conversation list (compact JSON array)."""
        records = [c.model_dump(mode="json", exclude_none=True) for c in self._conversations]
        return json.dumps(records, ensure_ascii=False, separators=(",", ":"))

    async def flush(self) -> bool:
        """
        Write the full list to storage.

        Returns:
            True if persisted; failures are logged and kept in
            ``last_persist_error`` while the in-memory state stays current
        """
        try:
            await self._storage.write(self._storage_key, self.serialize())
        except InfrastructureError as e:
            logger.error(f"Failed to persist conversations: {e}")
            self.last_persist_error = e
            return False
        self.last_persist_error = None
        return True

    # ===========================================
    # Queries
    # ===========================================

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    def list_conversations(self) -> list[Conversation]:
        """All conversations, oldest first (copies)."""
        return [c.model_copy(deep=True) for c in self._conversations]

    def summaries(self) -> list[ConversationSummary]:
        """Sidebar entries, newest first."""
        return [
            ConversationSummary(id=c.id, title=c.title, message_count=len(c.messages))
            for c in reversed(self._conversations)
        ]

    def get(self, conversation_id: str) -> Conversation:
        """Get a conversation by ID (copy)."""
        return self._find(conversation_id).model_copy(deep=True)

    def get_active(self) -> Optional[Conversation]:
        """Get the active conversation, if any."""
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    # ===========================================
    # Mutations
    # ===========================================

    async def create_conversation(self) -> Conversation:
        """Create an empty conversation and make it active."""
        conversation = Conversation(id=self._next_id(), title=DEFAULT_TITLE)
        self._conversations.append(conversation)
        self._active_id = conversation.id
        await self.flush()
        logger.info(f"Created conversation {conversation.id}")
        return conversation.model_copy(deep=True)

    async def append_user_message(
        self,
        conversation_id: str,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> Message:
        """Append a user message; the first one also sets the title."""
        conversation = self._find(conversation_id)
        message = Message(role=MessageRole.USER, content=content, attachment=attachment)
        if not any(m.is_user for m in conversation.messages):
            conversation.title = derive_title(message)
        conversation.messages.append(message)
        await self.flush()
        return message.model_copy(deep=True)

    async def append_assistant_message(self, conversation_id: str, content: str) -> Message:
        """Append an assistant message."""
        conversation = self._find(conversation_id)
        message = Message(role=MessageRole.ASSISTANT, content=content)
        conversation.messages.append(message)
        await self.flush()
        return message.model_copy(deep=True)

    async def attach_sentiment(
        self,
        conversation_id: str,
        sentiment: Sentiment,
    ) -> Optional[Message]:
        """Label the most recent user message that has no sentiment yet."""
        conversation = self._find(conversation_id)
        for index in range(len(conversation.messages) - 1, -1, -1):
            message = conversation.messages[index]
            if message.is_user and message.sentiment is None:
                updated = message.model_copy(update={"sentiment": sentiment})
                conversation.messages[index] = updated
                await self.flush()
                return updated.model_copy(deep=True)
        return None

    async def retract_last_user_message(self, conversation_id: str) -> bool:
        """
        Remove the trailing user message after a failed round trip.

        Only a last message that is a user message without a sentiment label
        is removed; anything else is left as is.

        Returns:
            True if a message was removed
        """
        conversation = self._find(conversation_id)
        if not conversation.messages:
            return False
        last = conversation.messages[-1]
        if not last.is_user or last.sentiment is not None:
            return False

        conversation.messages.pop()
        if not any(m.is_user for m in conversation.messages):
            conversation.title = DEFAULT_TITLE
        await self.flush()
        return True

    def select(self, conversation_id: str) -> Conversation:
        """Switch the active conversation."""
        conversation = self._find(conversation_id)
        self._active_id = conversation.id
        return conversation.model_copy(deep=True)

    def start_new(self) -> None:
        """Clear the active selection; existing conversations are kept."""
        self._active_id = None

    # ===========================================
    # Internals
    # ===========================================

    def _find(self, conversation_id: str) -> Conversation:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        raise NotFoundError(f"Conversation not found: {conversation_id}")

    def _next_id(self) -> str:
        candidate = self._id_factory()
        existing = {c.id for c in self._conversations}
        while candidate in existing:
            candidate = str(int(candidate) + 1) if candidate.isdigit() else f"{candidate}-1"
        return candidate
