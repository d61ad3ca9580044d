"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from chatty.core.config import get_settings
from chatty.interfaces.llm_provider import ILLMProvider
from chatty.interfaces.storage_provider import IStorageProvider
from chatty.services.chat_service import ChatService
from chatty.services.chat_view_service import ChatViewService
from chatty.services.content_filter_service import ContentFilterService
from chatty.services.conversation_store import ConversationStore
from chatty.services.llm_utils import CallPolicy
from chatty.services.response_service import ResponseService
from chatty.services.sentiment_service import SentimentService


# ===========================================
# Infrastructure Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """
    Get LLM provider instance based on LLM_PROVIDER setting.

    Supports:
    - gemini-api: Gemini API (API Key)
    """
    settings = get_settings()

    if settings.LLM_PROVIDER == "gemini-api":
        from chatty.infrastructure.local.gemini_api_provider import GeminiAPIProvider
        return GeminiAPIProvider(settings.GEMINI_MODEL)

    else:
        raise ValueError(f"Unknown LLM_PROVIDER: {settings.LLM_PROVIDER}")


@lru_cache()
def get_storage_provider() -> IStorageProvider:
    """Get storage provider instance based on STORAGE_BACKEND setting."""
    settings = get_settings()
    if settings.uses_sqlite_storage:
        from chatty.infrastructure.local.sqlite_storage_provider import SqliteStorageProvider
        return SqliteStorageProvider()
    else:
        from chatty.infrastructure.local.storage_provider import LocalStorageProvider
        return LocalStorageProvider(settings.STORAGE_BASE_PATH)


@lru_cache()
def get_call_policy() -> CallPolicy:
    """Get timeout/retry policy for model calls."""
    return CallPolicy.from_settings(get_settings())


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_response_service() -> ResponseService:
    return ResponseService(get_llm_provider(), policy=get_call_policy())


@lru_cache()
def get_sentiment_service() -> SentimentService:
    settings = get_settings()
    provider = get_llm_provider().with_model(settings.SENTIMENT_MODEL)
    return SentimentService(provider, policy=get_call_policy())


@lru_cache()
def get_content_filter_service() -> ContentFilterService:
    settings = get_settings()
    provider = get_llm_provider().with_model(settings.FILTER_MODEL)
    return ContentFilterService(provider, policy=get_call_policy())


@lru_cache()
def get_chat_service() -> ChatService:
    return ChatService(get_response_service(), get_sentiment_service())


@lru_cache()
def get_conversation_store() -> ConversationStore:
    """Get the process-wide conversation store (loaded at startup)."""
    settings = get_settings()
    return ConversationStore(get_storage_provider(), settings.STORAGE_KEY)


@lru_cache()
def get_chat_view_service() -> ChatViewService:
    return ChatViewService(get_conversation_store(), get_chat_service())


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
ContentFilterServiceDep = Annotated[ContentFilterService, Depends(get_content_filter_service)]
ChatViewServiceDep = Annotated[ChatViewService, Depends(get_chat_view_service)]
