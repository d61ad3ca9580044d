"""
Sentiment Analysis Service.
"""

from __future__ import annotations

from typing import Any, Optional

from chatty.interfaces.llm_provider import ILLMProvider
from chatty.models.flows import AnalyzeSentimentInput, AnalyzeSentimentOutput, validate_payload
from chatty.prompts.sentiment_prompt import (
    SENTIMENT_SCHEMA,
    SENTIMENT_SYSTEM_INSTRUCTION,
    build_sentiment_contents,
)
from chatty.services.llm_utils import CallPolicy, generate_structured


class SentimentService:
    """Classifies text as Positive, Negative or Neutral."""

    def __init__(self, llm_provider: ILLMProvider, policy: Optional[CallPolicy] = None):
        self._llm_provider = llm_provider
        self._policy = policy

    async def analyze(self, payload: AnalyzeSentimentInput | dict[str, Any]) -> AnalyzeSentimentOutput:
        """
        Classify the sentiment of a text.

        Raises:
            ValidationError: If the payload is malformed (no call is made)
            LLMValidationError: If the label is missing or outside the label set
            LLMError: If the model call fails
        """
        request = validate_payload(AnalyzeSentimentInput, payload)
        return await generate_structured(
            self._llm_provider,
            contents=build_sentiment_contents(request),
            output_model=AnalyzeSentimentOutput,
            response_schema=SENTIMENT_SCHEMA,
            system_instruction=SENTIMENT_SYSTEM_INSTRUCTION,
            temperature=0.0,
            max_output_tokens=64,
            policy=self._policy,
        )
