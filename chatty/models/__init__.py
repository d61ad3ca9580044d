"""Pydantic models (schemas) for the application."""

from chatty.models.enums import MessageRole, Sentiment, StreamChunkType
from chatty.models.conversation import Attachment, Conversation, ConversationSummary, Message
from chatty.models.chat import (
    ChatViewState,
    ConversationMessageRequest,
    FilterContentRequest,
    FilterContentResponse,
    StreamingChatChunk,
    SubmitMessageRequest,
    SuggestionClickRequest,
    SubmitMessageResult,
)
from chatty.models.flows import (
    AnalyzeSentimentInput,
    AnalyzeSentimentOutput,
    FilterContentInput,
    FilterContentOutput,
    GenerateResponseInput,
    GenerateResponseOutput,
    validate_payload,
)

__all__ = [
    # Enums
    "MessageRole",
    "Sentiment",
    "StreamChunkType",
    # Conversation
    "Attachment",
    "Conversation",
    "ConversationSummary",
    "Message",
    # Chat
    "ChatViewState",
    "ConversationMessageRequest",
    "FilterContentRequest",
    "FilterContentResponse",
    "StreamingChatChunk",
    "SubmitMessageRequest",
    "SuggestionClickRequest",
    "SubmitMessageResult",
    # Flows
    "AnalyzeSentimentInput",
    "AnalyzeSentimentOutput",
    "FilterContentInput",
    "FilterContentOutput",
    "GenerateResponseInput",
    "GenerateResponseOutput",
    "validate_payload",
]
