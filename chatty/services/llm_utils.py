"""
Shared LLM invocation utilities for structured (JSON) generation.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from google.genai import errors as genai_errors
from google.genai.types import Content, GenerateContentConfig, SafetySetting
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from chatty.core.config import Settings, get_settings
from chatty.core.exceptions import LLMError, LLMValidationError
from chatty.core.logger import logger
from chatty.interfaces.llm_provider import ILLMProvider

OutputT = TypeVar("OutputT", bound=BaseModel)

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_RETRYABLE_CLIENT_CODES = {408, 429}


@dataclass(frozen=True)
class CallPolicy:
    """Timeout and retry policy for a single model call."""

    timeout_seconds: float
    max_retries: int
    backoff_seconds: float

    @classmethod
    def from_settings(cls, settings: Settings) -> "CallPolicy":
        return cls(
            timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
            max_retries=max(0, settings.LLM_MAX_RETRIES),
            backoff_seconds=max(0.0, settings.LLM_RETRY_BACKOFF_SECONDS),
        )

    @property
    def attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Exponential backoff before the attempt following ``attempt``."""
        return self.backoff_seconds * (2 ** (attempt - 1))


def parse_structured_output(output_model: type[OutputT], raw_output: Optional[str]) -> OutputT:
    """
    Validate raw model text against an output schema.

    Raises:
        LLMValidationError: If the text is empty, not JSON, or off-schema
    """
    text = (raw_output or "").strip()
    if not text:
        raise LLMValidationError("Model returned an empty response", raw_output="")

    # Fences inside JSON string values are content, not a wrapper
    fenced = _FENCED_JSON.fullmatch(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        return output_model.model_validate_json(text)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "output"
        raise LLMValidationError(
            f"Malformed model output ({location}: {first.get('msg')})",
            raw_output=text,
        ) from e


def _response_text(response: Any) -> str:
    text = getattr(response, "text", None) or ""
    if text:
        return text
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None)
    if block_reason:
        logger.warning(f"GenAI blocked the request: {block_reason}")
    return ""


def _is_retryable(exc: genai_errors.APIError) -> bool:
    if isinstance(exc, genai_errors.ServerError):
        return True
    return getattr(exc, "code", None) in _RETRYABLE_CLIENT_CODES


async def generate_structured(
    llm_provider: ILLMProvider,
    contents: list[Content],
    output_model: type[OutputT],
    response_schema: dict,
    system_instruction: Optional[str] = None,
    safety_settings: Optional[list[SafetySetting]] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
    policy: Optional[CallPolicy] = None,
) -> OutputT:
    """
    Generate a JSON response and validate it against ``output_model``.

    Transport failures, timeouts and malformed output are retried according
    to the call policy; client errors (bad key, bad request) are not.

    Returns:
        Validated output model

    Raises:
        LLMValidationError: If the final attempt produced off-schema output
        LLMError: If the request failed
    """
    settings = get_settings()
    policy = policy or CallPolicy.from_settings(settings)

    config_kwargs: dict = {
        "temperature": settings.LLM_TEMPERATURE if temperature is None else temperature,
        "max_output_tokens": max_output_tokens or settings.LLM_MAX_OUTPUT_TOKENS,
        "response_mime_type": "application/json",
        "response_schema": response_schema,
    }
    if system_instruction:
        config_kwargs["system_instruction"] = system_instruction
    if safety_settings:
        config_kwargs["safety_settings"] = safety_settings

    client = llm_provider.get_client()
    model_name = llm_provider.get_model()
    config = GenerateContentConfig(**config_kwargs)

    last_error: LLMError = LLMError("GenAI request was not attempted")
    raw_output = ""

    for attempt in range(1, policy.attempts + 1):
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=model_name,
                    contents=contents,
                    config=config,
                ),
                timeout=policy.timeout_seconds,
            )
            raw_output = _response_text(response)
            return parse_structured_output(output_model, raw_output)

        except LLMValidationError as e:
            last_error = e
            logger.warning(
                f"{output_model.__name__} validation failed (attempt {attempt}/{policy.attempts}): {e}"
            )

        except asyncio.TimeoutError:
            last_error = LLMError(
                f"GenAI request timed out after {policy.timeout_seconds}s",
                details={"model": model_name},
            )
            logger.warning(f"GenAI request timed out (attempt {attempt}/{policy.attempts})")

        except genai_errors.APIError as e:
            last_error = LLMError(f"GenAI request failed: {e}", details={"model": model_name})
            logger.warning(f"GenAI request failed (attempt {attempt}/{policy.attempts}): {e}")
            if not _is_retryable(e):
                break

        except Exception as e:
            last_error = LLMError(f"GenAI request failed: {e}", details={"model": model_name})
            logger.warning(f"GenAI request failed (attempt {attempt}/{policy.attempts}): {e}")

        if attempt < policy.attempts:
            await asyncio.sleep(policy.delay_for(attempt))

    if isinstance(last_error, LLMValidationError):
        raise LLMValidationError(
            message=f"{output_model.__name__} failed after {policy.attempts} attempts: {last_error.message}",
            raw_output=raw_output,
            attempts=policy.attempts,
        )
    raise last_error
