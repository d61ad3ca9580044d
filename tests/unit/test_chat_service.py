"""
Unit tests for the chat orchestration function.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from chatty.core.exceptions import LLMError
from chatty.models.enums import Sentiment
from chatty.models.flows import AnalyzeSentimentOutput, GenerateResponseOutput
from chatty.services.chat_service import (
    EMPTY_INPUT_ERROR,
    GENERIC_FAILURE_ERROR,
    ChatService,
    join_all,
)

PNG_URI = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def response_service():
    service = MagicMock()
    service.generate = AsyncMock(
        return_value=GenerateResponseOutput(response="Hi!", suggestions=["Tell me more"])
    )
    return service


@pytest.fixture
def sentiment_service():
    service = MagicMock()
    service.analyze = AsyncMock(return_value=AnalyzeSentimentOutput(sentiment=Sentiment.POSITIVE))
    return service


@pytest.fixture
def chat_service(response_service, sentiment_service):
    return ChatService(response_service, sentiment_service)


@pytest.mark.asyncio
async def test_submit_message_success(chat_service, response_service, sentiment_service):
    result = await chat_service.submit_message("Hello")

    assert result.ok
    assert result.response == "Hi!"
    assert result.suggestions == ["Tell me more"]
    assert result.sentiment == Sentiment.POSITIVE
    sentiment_service.analyze.assert_awaited_once()
    assert sentiment_service.analyze.await_args.args[0].text == "Hello"


@pytest.mark.asyncio
@pytest.mark.parametrize("prompt", ["", "   \n"])
async def test_empty_submission_rejected_without_calls(
    chat_service, response_service, sentiment_service, prompt
):
    result = await chat_service.submit_message(prompt)

    assert result.error == EMPTY_INPUT_ERROR
    assert result.response is None
    response_service.generate.assert_not_awaited()
    sentiment_service.analyze.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_attachment_rejected_without_calls(chat_service, response_service):
    result = await chat_service.submit_message("Look", "data:image/png,notbase64")

    assert result.error is not None
    assert result.error.startswith("photoDataUri")
    response_service.generate.assert_not_awaited()


@pytest.mark.asyncio
async def test_attachment_only_defaults_to_neutral(chat_service, response_service, sentiment_service):
    result = await chat_service.submit_message("", PNG_URI)

    assert result.ok
    assert result.sentiment == Sentiment.NEUTRAL
    sentiment_service.analyze.assert_not_awaited()
    request = response_service.generate.await_args.args[0]
    assert request.photo_data_uri == PNG_URI


@pytest.mark.asyncio
async def test_generation_failure_returns_generic_error(chat_service, response_service):
    response_service.generate.side_effect = LLMError("boom")

    result = await chat_service.submit_message("test")

    assert result.error == GENERIC_FAILURE_ERROR
    assert result.response is None
    assert result.sentiment is None


@pytest.mark.asyncio
async def test_sentiment_failure_returns_generic_error(chat_service, sentiment_service):
    sentiment_service.analyze.side_effect = LLMError("boom")

    result = await chat_service.submit_message("test")

    assert result.error == GENERIC_FAILURE_ERROR


@pytest.mark.asyncio
async def test_join_all_cancels_sibling_on_failure():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def failing():
        raise LLMError("boom")

    with pytest.raises(LLMError):
        await join_all(slow(), failing())

    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_join_all_preserves_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await join_all(value("a", 0.02), value("b", 0)) == ["a", "b"]
