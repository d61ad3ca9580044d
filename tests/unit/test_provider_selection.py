from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from chatty.api import deps
from chatty.core.config import Settings
from chatty.infrastructure.local.gemini_api_provider import GeminiAPIProvider


def _base_settings() -> SimpleNamespace:
    return SimpleNamespace(
        LLM_PROVIDER="gemini-api",
        GEMINI_MODEL="gemini-1.5-pro-latest",
        SENTIMENT_MODEL="gemini-1.5-flash-latest",
        FILTER_MODEL="gemini-1.5-pro-latest",
        STORAGE_BASE_PATH="./storage",
        uses_sqlite_storage=False,
        LLM_TIMEOUT_SECONDS=60.0,
        LLM_MAX_RETRIES=1,
        LLM_RETRY_BACKOFF_SECONDS=0.5,
    )


def test_get_llm_provider_selects_gemini_api() -> None:
    settings = _base_settings()
    provider = object()

    deps.get_llm_provider.cache_clear()
    with patch("chatty.api.deps.get_settings", return_value=settings):
        with patch(
            "chatty.infrastructure.local.gemini_api_provider.GeminiAPIProvider"
        ) as provider_cls:
            provider_cls.return_value = provider
            resolved = deps.get_llm_provider()
    deps.get_llm_provider.cache_clear()

    assert resolved is provider
    provider_cls.assert_called_once_with("gemini-1.5-pro-latest")


def test_get_llm_provider_rejects_unknown_provider() -> None:
    settings = _base_settings()
    settings.LLM_PROVIDER = "unknown"

    deps.get_llm_provider.cache_clear()
    with patch("chatty.api.deps.get_settings", return_value=settings):
        with pytest.raises(ValueError):
            deps.get_llm_provider()
    deps.get_llm_provider.cache_clear()


def test_get_storage_provider_selects_file(tmp_path) -> None:
    settings = _base_settings()
    settings.STORAGE_BASE_PATH = str(tmp_path)
    provider = object()

    deps.get_storage_provider.cache_clear()
    with patch("chatty.api.deps.get_settings", return_value=settings):
        with patch(
            "chatty.infrastructure.local.storage_provider.LocalStorageProvider"
        ) as provider_cls:
            provider_cls.return_value = provider
            resolved = deps.get_storage_provider()
    deps.get_storage_provider.cache_clear()

    assert resolved is provider
    provider_cls.assert_called_once_with(str(tmp_path))


def test_get_storage_provider_selects_sqlite() -> None:
    settings = _base_settings()
    settings.uses_sqlite_storage = True
    provider = object()

    deps.get_storage_provider.cache_clear()
    with patch("chatty.api.deps.get_settings", return_value=settings):
        with patch(
            "chatty.infrastructure.local.sqlite_storage_provider.SqliteStorageProvider"
        ) as provider_cls:
            provider_cls.return_value = provider
            resolved = deps.get_storage_provider()
    deps.get_storage_provider.cache_clear()

    assert resolved is provider
    provider_cls.assert_called_once_with()


def test_sentiment_service_uses_sentiment_model() -> None:
    settings = _base_settings()
    base_provider = MagicMock()

    deps.get_call_policy.cache_clear()
    deps.get_sentiment_service.cache_clear()
    with patch("chatty.api.deps.get_settings", return_value=settings):
        with patch("chatty.api.deps.get_llm_provider", return_value=base_provider):
            deps.get_sentiment_service()
    deps.get_sentiment_service.cache_clear()
    deps.get_call_policy.cache_clear()

    base_provider.with_model.assert_called_once_with("gemini-1.5-flash-latest")


def test_gemini_provider_requires_api_key() -> None:
    with pytest.raises(ValueError):
        GeminiAPIProvider("gemini-1.5-pro-latest", settings=Settings(GOOGLE_API_KEY=""))


def test_gemini_provider_with_model_shares_client() -> None:
    client = object()
    provider = GeminiAPIProvider(
        "gemini-1.5-pro-latest",
        settings=Settings(GOOGLE_API_KEY="test-key"),
        client=client,
    )

    flash = provider.with_model("gemini-1.5-flash-latest")

    assert provider.with_model("gemini-1.5-pro-latest") is provider
    assert flash.get_model() == "gemini-1.5-flash-latest"
    assert flash.get_client() is client
