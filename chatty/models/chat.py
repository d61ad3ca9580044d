"""
Chat model definitions.

Models for the HTTP interface between the client and the chat services.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from chatty.core.config import get_settings
from chatty.models.conversation import ConversationSummary, Message
from chatty.models.enums import Sentiment, StreamChunkType
from chatty.utils.message_format import ContentSegment

settings = get_settings()


class SubmitMessageRequest(BaseModel):
    """Form submission: prompt text plus optional attachment."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field("", max_length=settings.MAX_PROMPT_LENGTH, description="Prompt text")
    photo_data_uri: Optional[str] = Field(
        None,
        alias="photoDataUri",
        description="Attachment as data URI (data:<mime>;base64,...)",
    )


class ConversationMessageRequest(SubmitMessageRequest):
    """Submission into the active conversation."""

    attachment_name: Optional[str] = Field(
        None,
        alias="attachmentName",
        max_length=255,
        description="Original attachment file name",
    )


class SuggestionClickRequest(BaseModel):
    """Suggestion chip clicked by the user."""

    suggestion: str = Field(..., min_length=1, max_length=settings.MAX_PROMPT_LENGTH)


class SubmitMessageResult(BaseModel):
    """Combined orchestration result, or a single user-facing error."""

    response: Optional[str] = Field(None, description="Assistant response text")
    suggestions: Optional[list[str]] = Field(None, description="Follow-up questions")
    sentiment: Optional[Sentiment] = Field(None, description="Sentiment of the prompt")
    error: Optional[str] = Field(None, description="User-facing error message")

    @property
    def ok(self) -> bool:
        return self.error is None


class FilterContentRequest(BaseModel):
    """Request for the content filter endpoint."""

    text: str = Field(..., max_length=settings.MAX_PROMPT_LENGTH, description="Text to check")


class FilterContentResponse(BaseModel):
    """Content filter verdict."""

    is_appropriate: bool
    filtered_text: str
    blocked: bool = Field(False, description="Inappropriate and not filterable")


class ChatViewState(BaseModel):
    """Everything the client needs to render the chat page."""

    conversations: list[ConversationSummary] = Field(default_factory=list)
    active_conversation_id: Optional[str] = None
    messages: list[Message] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    pending: bool = False
    error: Optional[str] = Field(None, description="Transient notification for the last action")


class StreamingChatChunk(BaseModel):
    """Streaming submit event."""

    chunk_type: StreamChunkType = Field(..., description="Chunk type")
    conversation_id: Optional[str] = None
    content: str = Field("", description="Text content")
    message: Optional[Message] = None
    suggestions: list[str] = Field(default_factory=list)
    segments: list[ContentSegment] = Field(
        default_factory=list,
        description="Assistant content split into text and code blocks",
    )
