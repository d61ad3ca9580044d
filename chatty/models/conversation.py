"""
Conversation and message models.

These models are what the conversation store keeps in memory and persists
for session restore.
"""

from typing import Optional

from pydantic import BaseModel, Field

from chatty.models.enums import MessageRole, Sentiment

DEFAULT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 40


class Attachment(BaseModel):
    """File attached to a user message."""

    name: str = Field(..., description="Original file name")
    data_uri: str = Field(..., description="File content as a Base64 data URI")


class Message(BaseModel):
    """A single conversation turn."""

    role: MessageRole = Field(..., description="Message role")
    content: str = Field("", description="Message content")
    sentiment: Optional[Sentiment] = Field(None, description="Sentiment label (user messages)")
    attachment: Optional[Attachment] = Field(None, description="Attached file (user messages)")

    @property
    def is_user(self) -> bool:
        return self.role == MessageRole.USER


class Conversation(BaseModel):
    """Ordered sequence of messages."""

    id: str = Field(..., description="Conversation ID")
    title: str = Field(DEFAULT_TITLE, description="Conversation title")
    messages: list[Message] = Field(default_factory=list, description="Messages in order")


class ConversationSummary(BaseModel):
    """Conversation entry for the sidebar list."""

    id: str
    title: str
    message_count: int


def derive_title(message: Message) -> str:
    """Title from the first 40 characters of the first user message."""
    text = message.content.strip()
    if text:
        return text[:TITLE_MAX_LENGTH]
    if message.attachment:
        return message.attachment.name[:TITLE_MAX_LENGTH]
    return DEFAULT_TITLE
