"""
Enum definitions for the application.

These enums are used across models and provide type-safe role/label values.
"""

from enum import Enum


class MessageRole(str, Enum):
    """Who authored a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Sentiment(str, Enum):
    """Sentiment label attached to user messages."""

    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class StreamChunkType(str, Enum):
    """Event types emitted by the streaming submit endpoint."""

    USER_MESSAGE = "user_message"
    TYPING = "typing"
    ASSISTANT_MESSAGE = "assistant_message"
    ERROR = "error"
    DONE = "done"
