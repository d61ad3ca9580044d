"""
Request/response schemas for the three model flows.

generate-response, filter-content and analyze-sentiment each exchange a
fixed-shape payload with the model. Unknown fields are rejected and scalar
values are never coerced (a number is not text, "true" is not a boolean).
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from chatty.core.config import get_settings
from chatty.core.exceptions import ValidationError
from chatty.models.enums import Sentiment
from chatty.utils.data_uri import parse_data_uri

settings = get_settings()

FlowModelT = TypeVar("FlowModelT", bound=BaseModel)


class FlowModel(BaseModel):
    """Base for flow payloads."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


# ===========================================
# generate-response
# ===========================================


class GenerateResponseInput(FlowModel):
    """Input for response generation."""

    prompt: StrictStr = Field(
        ...,
        max_length=settings.MAX_PROMPT_LENGTH,
        description="The prompt to generate a response for.",
    )
    photo_data_uri: Optional[StrictStr] = Field(
        None,
        alias="photoDataUri",
        description=(
            "An optional file, as a data URI that must include a MIME type and use "
            "Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )

    @field_validator("photo_data_uri")
    @classmethod
    def _validate_data_uri(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parse_data_uri(value)
        return value


class GenerateResponseOutput(FlowModel):
    """Model output for response generation."""

    response: StrictStr = Field(..., description="The AI-generated response.")
    suggestions: list[StrictStr] = Field(
        ...,
        description="A list of 3-4 related questions the user might want to ask next.",
    )


# ===========================================
# filter-content
# ===========================================


class FilterContentInput(FlowModel):
    """Input for inappropriate-content filtering."""

    text: StrictStr = Field(
        ...,
        min_length=1,
        max_length=settings.MAX_PROMPT_LENGTH,
        description="The text to filter for inappropriate content.",
    )


class FilterContentOutput(FlowModel):
    """Model output for inappropriate-content filtering."""

    is_appropriate: StrictBool = Field(
        ..., description="Whether the content is appropriate or not."
    )
    filtered_text: StrictStr = Field(
        ...,
        description=(
            "The filtered text, or the original text if no filtering was needed. "
            "Empty when the text cannot be filtered and must be blocked."
        ),
    )

    @property
    def blocked(self) -> bool:
        """Inappropriate text that could not be filtered."""
        return not self.is_appropriate and not self.filtered_text.strip()


# ===========================================
# analyze-sentiment
# ===========================================


class AnalyzeSentimentInput(FlowModel):
    """Input for sentiment classification."""

    text: StrictStr = Field(
        ...,
        min_length=1,
        max_length=settings.MAX_PROMPT_LENGTH,
        description="The text to analyze.",
    )


class AnalyzeSentimentOutput(FlowModel):
    """Model output for sentiment classification."""

    sentiment: Sentiment = Field(..., description="The detected sentiment of the text.")


def validate_payload(model_cls: type[FlowModelT], data: Any) -> FlowModelT:
    """
    Validate a candidate payload against a flow schema.

    Args:
        model_cls: Schema to validate against
        data: Candidate payload (mapping or model instance)

    Returns:
        Validated model instance

    Raises:
        ValidationError: Naming the first offending field
    """
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = first.get("msg", "Invalid input.")
        if field:
            message = f"{field}: {message}"
        raise ValidationError(message, field=field) from e
