"""
Chat Service.

Form-action entry point: validates a submission, runs response generation
and sentiment classification concurrently and returns one combined result or
one user-facing error.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Optional

from chatty.core.exceptions import ValidationError
from chatty.core.logger import logger
from chatty.models.enums import Sentiment
from chatty.models.flows import (
    AnalyzeSentimentInput,
    AnalyzeSentimentOutput,
    GenerateResponseInput,
    validate_payload,
)
from chatty.models.chat import SubmitMessageResult
from chatty.services.response_service import ResponseService
from chatty.services.sentiment_service import SentimentService

EMPTY_INPUT_ERROR = "Please enter a message or upload a file."
GENERIC_FAILURE_ERROR = "Failed to get a response from the AI. Please try again."


async def _neutral() -> AnalyzeSentimentOutput:
    return AnalyzeSentimentOutput(sentiment=Sentiment.NEUTRAL)


async def join_all(*aws: Awaitable[Any]) -> list[Any]:
    """
    Await all awaitables; the first failure cancels the rest and is raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ChatService:
    """Orchestrates one chat submission."""

    def __init__(self, response_service: ResponseService, sentiment_service: SentimentService):
        self._response_service = response_service
        self._sentiment_service = sentiment_service

    def validate_submission(
        self,
        prompt: Any,
        photo_data_uri: Optional[Any] = None,
    ) -> GenerateResponseInput:
        """
        Validate a submission before any network activity.

        Raises:
            ValidationError: Naming the offending field, or the empty-input message
        """
        request = validate_payload(
            GenerateResponseInput,
            {"prompt": prompt, "photoDataUri": photo_data_uri or None},
        )
        if not request.prompt.strip() and not request.photo_data_uri:
            raise ValidationError(EMPTY_INPUT_ERROR, field="prompt")
        return request

    async def submit_message(
        self,
        prompt: Any,
        photo_data_uri: Optional[Any] = None,
    ) -> SubmitMessageResult:
        """
        Process a chat submission.

        A whitespace-only prompt counts as empty: it is rejected without an
        attachment and skips sentiment (Neutral) with one.

        Args:
            prompt: Prompt text (may be blank when a file is attached)
            photo_data_uri: Optional attachment as a data URI

        Returns:
            SubmitMessageResult with response/suggestions/sentiment, or error
        """
        try:
            request = self.validate_submission(prompt, photo_data_uri)
        except ValidationError as e:
            return SubmitMessageResult(error=e.message)

        if request.prompt.strip():
            sentiment_call = self._sentiment_service.analyze(
                AnalyzeSentimentInput(text=request.prompt)
            )
        else:
            sentiment_call = _neutral()

        try:
            generated, analyzed = await join_all(
                self._response_service.generate(request),
                sentiment_call,
            )
        except Exception as e:
            logger.error(f"Error processing message: {e}")
            return SubmitMessageResult(error=GENERIC_FAILURE_ERROR)

        return SubmitMessageResult(
            response=generated.response,
            suggestions=generated.suggestions,
            sentiment=analyzed.sentiment,
        )
