"""
Chat View Service.

Turns user interaction (submit, suggestion click, conversation switch, new
chat) into store mutations and orchestration calls, and produces the view
state the client renders.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from chatty.core.exceptions import ValidationError
from chatty.core.logger import setup_logger
from chatty.models.chat import ChatViewState, StreamingChatChunk, SubmitMessageResult
from chatty.models.conversation import Attachment
from chatty.models.enums import StreamChunkType
from chatty.services.chat_service import ChatService
from chatty.services.conversation_store import ConversationStore
from chatty.utils.data_uri import decode_data_uri
from chatty.utils.message_format import split_content

logger = setup_logger(__name__)

DEFAULT_ATTACHMENT_NAME = "attachment"
BUSY_ERROR = "Please wait for the current response before sending another message."


class ChatViewService:
    """Presentation-side controller over the conversation store."""

    def __init__(self, store: ConversationStore, chat_service: ChatService):
        self._store = store
        self._chat_service = chat_service
        self._suggestions: list[str] = []
        self._suggestions_for: Optional[str] = None
        self._pending: set[str] = set()

    def view(self, error: Optional[str] = None) -> ChatViewState:
        """Current view of the active conversation."""
        active = self._store.get_active()
        active_id = active.id if active else None
        suggestions = self._suggestions if active_id and self._suggestions_for == active_id else []
        return ChatViewState(
            conversations=self._store.summaries(),
            active_conversation_id=active_id,
            messages=active.messages if active else [],
            suggestions=list(suggestions),
            pending=active_id in self._pending,
            error=error,
        )

    def switch_conversation(self, conversation_id: str) -> ChatViewState:
        """
        Make another conversation active.

        Raises:
            NotFoundError: If the conversation does not exist
        """
        self._store.select(conversation_id)
        self._clear_suggestions()
        return self.view()

    def start_new_conversation(self) -> ChatViewState:
        self._store.start_new()
        self._clear_suggestions()
        return self.view()

    async def click_suggestion(self, suggestion: str) -> ChatViewState:
        """Submit a suggestion chip as the next prompt."""
        return await self.submit(suggestion)

    async def submit(
        self,
        prompt: str,
        photo_data_uri: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> ChatViewState:
        """
        Submit a message into the active conversation.

        Returns:
            View state after the round trip; ``error`` carries the transient
            notification when the submission failed
        """
        error: Optional[str] = None
        async for chunk in self.submit_stream(prompt, photo_data_uri, attachment_name):
            if chunk.chunk_type == StreamChunkType.ERROR:
                error = chunk.content
        return self.view(error=error)

    async def submit_stream(
        self,
        prompt: str,
        photo_data_uri: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> AsyncGenerator[StreamingChatChunk, None]:
        """
        Submit a message, yielding progress events.

        Yields user_message, typing, then assistant_message or error, then
        done. Input rejected before any model call yields only error and done.

        A conversation accepts one submission at a time. If the consumer
        stops before the round trip settles (client disconnect, cancellation)
        the optimistic user message is retracted.
        """
        conversation_id = self._store.active_id
        if conversation_id in self._pending:
            yield StreamingChatChunk(
                chunk_type=StreamChunkType.ERROR,
                conversation_id=conversation_id,
                content=BUSY_ERROR,
            )
            yield StreamingChatChunk(chunk_type=StreamChunkType.DONE, conversation_id=conversation_id)
            return

        self._clear_suggestions()

        try:
            self._chat_service.validate_submission(prompt, photo_data_uri)
        except ValidationError as e:
            yield StreamingChatChunk(chunk_type=StreamChunkType.ERROR, content=e.message)
            yield StreamingChatChunk(chunk_type=StreamChunkType.DONE)
            return

        if conversation_id is None:
            conversation_id = (await self._store.create_conversation()).id

        # Requests are tied to the conversation they were issued for
        self._pending.add(conversation_id)
        settled = False
        try:
            user_message = await self._store.append_user_message(
                conversation_id,
                content=prompt,
                attachment=self._build_attachment(photo_data_uri, attachment_name),
            )
            yield StreamingChatChunk(
                chunk_type=StreamChunkType.USER_MESSAGE,
                conversation_id=conversation_id,
                message=user_message,
            )
            yield StreamingChatChunk(chunk_type=StreamChunkType.TYPING, conversation_id=conversation_id)

            result = await self._chat_service.submit_message(prompt, photo_data_uri)
            if result.ok:
                assistant_message = await self._complete(conversation_id, result)
            else:
                await self._store.retract_last_user_message(conversation_id)
            settled = True
        finally:
            self._pending.discard(conversation_id)
            if not settled:
                logger.info(f"Submission into {conversation_id} abandoned; retracting user message")
                await self._store.retract_last_user_message(conversation_id)

        if result.ok:
            yield StreamingChatChunk(
                chunk_type=StreamChunkType.ASSISTANT_MESSAGE,
                conversation_id=conversation_id,
                content=assistant_message.content,
                message=assistant_message,
                suggestions=result.suggestions or [],
                segments=split_content(assistant_message.content),
            )
        else:
            yield StreamingChatChunk(
                chunk_type=StreamChunkType.ERROR,
                conversation_id=conversation_id,
                content=result.error or "",
            )

        yield StreamingChatChunk(chunk_type=StreamChunkType.DONE, conversation_id=conversation_id)

    async def _complete(self, conversation_id: str, result: SubmitMessageResult):
        await self._store.attach_sentiment(conversation_id, result.sentiment)
        assistant_message = await self._store.append_assistant_message(
            conversation_id, result.response or ""
        )
        if self._store.active_id == conversation_id:
            self._suggestions = list(result.suggestions or [])
            self._suggestions_for = conversation_id
        else:
            logger.info(f"Dropping suggestions for inactive conversation {conversation_id}")
        return assistant_message

    def _clear_suggestions(self) -> None:
        self._suggestions = []
        self._suggestions_for = None

    @staticmethod
    def _build_attachment(
        photo_data_uri: Optional[str],
        attachment_name: Optional[str],
    ) -> Optional[Attachment]:
        if not photo_data_uri:
            return None
        name = (attachment_name or "").strip()
        if not name:
            _, mime_type = decode_data_uri(photo_data_uri)
            name = f"{DEFAULT_ATTACHMENT_NAME}.{mime_type.split('/')[-1]}"
        return Attachment(name=name, data_uri=photo_data_uri)
