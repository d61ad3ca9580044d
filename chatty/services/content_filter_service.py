"""
Content Filter Service.

Classifies text as appropriate or not and returns a redacted version when the
text can be filtered. Available as a standalone capability; the chat flow
relies on the provider-side moderation thresholds instead.
"""

from __future__ import annotations

from typing import Any, Optional

from chatty.core.logger import logger
from chatty.interfaces.llm_provider import ILLMProvider
from chatty.models.flows import FilterContentInput, FilterContentOutput, validate_payload
from chatty.prompts.filter_content_prompt import (
    FILTER_CONTENT_SCHEMA,
    FILTER_CONTENT_SYSTEM_INSTRUCTION,
    build_filter_content_contents,
)
from chatty.prompts.safety import build_safety_settings
from chatty.services.llm_utils import CallPolicy, generate_structured


class ContentFilterService:
    """Service for filtering inappropriate content."""

    def __init__(self, llm_provider: ILLMProvider, policy: Optional[CallPolicy] = None):
        self._llm_provider = llm_provider
        self._policy = policy

    async def filter(self, payload: FilterContentInput | dict[str, Any]) -> FilterContentOutput:
        """
        Check text for inappropriate content.

        Returns:
            FilterContentOutput; ``blocked`` is True when the text is
            inappropriate and could not be filtered

        Raises:
            ValidationError: If the payload is malformed (no call is made)
            LLMValidationError: If the model output does not match the schema
            LLMError: If the model call fails
        """
        request = validate_payload(FilterContentInput, payload)
        result = await generate_structured(
            self._llm_provider,
            contents=build_filter_content_contents(request),
            output_model=FilterContentOutput,
            response_schema=FILTER_CONTENT_SCHEMA,
            system_instruction=FILTER_CONTENT_SYSTEM_INSTRUCTION,
            safety_settings=build_safety_settings(),
            temperature=0.0,
            policy=self._policy,
        )
        if not result.is_appropriate:
            logger.info(f"Content flagged as inappropriate (blocked={result.blocked})")
        return result
