"""
Response Generation Service.

Answers a prompt (optionally grounded on an attached file) and proposes
follow-up questions.
"""

from __future__ import annotations

from typing import Any, Optional

from chatty.core.logger import logger
from chatty.interfaces.llm_provider import ILLMProvider
from chatty.models.flows import GenerateResponseInput, GenerateResponseOutput, validate_payload
from chatty.prompts.generate_response_prompt import (
    GENERATE_RESPONSE_SCHEMA,
    GENERATE_RESPONSE_SYSTEM_INSTRUCTION,
    build_generate_response_contents,
)
from chatty.prompts.safety import build_safety_settings
from chatty.services.llm_utils import CallPolicy, generate_structured


class ResponseService:
    """Service for generating assistant responses."""

    def __init__(self, llm_provider: ILLMProvider, policy: Optional[CallPolicy] = None):
        """Initialize Response Service."""
        self._llm_provider = llm_provider
        self._policy = policy

    async def generate(self, payload: GenerateResponseInput | dict[str, Any]) -> GenerateResponseOutput:
        """
        Generate a response to the user's prompt.

        Args:
            payload: Prompt and optional attachment data URI

        Returns:
            GenerateResponseOutput with response text and suggestions

        Raises:
            ValidationError: If the payload is malformed (no call is made)
            LLMValidationError: If the model output does not match the schema
            LLMError: If the model call fails
        """
        request = validate_payload(GenerateResponseInput, payload)

        if request.photo_data_uri and not self._llm_provider.supports_vision():
            logger.warning(
                f"{self._llm_provider.get_model_name()} does not accept files; sending anyway"
            )

        output = await generate_structured(
            self._llm_provider,
            contents=build_generate_response_contents(request),
            output_model=GenerateResponseOutput,
            response_schema=GENERATE_RESPONSE_SCHEMA,
            system_instruction=GENERATE_RESPONSE_SYSTEM_INSTRUCTION,
            safety_settings=build_safety_settings(),
            policy=self._policy,
        )

        # Blank chips are useless to the client
        suggestions = [s.strip() for s in output.suggestions if s.strip()]
        logger.info(
            f"Generated response: {len(output.response)} chars, {len(suggestions)} suggestions"
        )
        return GenerateResponseOutput(response=output.response, suggestions=suggestions)
