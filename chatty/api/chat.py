"""
Chat API endpoint.

Stateless form action for a single submission, plus the content filter.
"""

from fastapi import APIRouter, HTTPException, status

from chatty.api.deps import ChatServiceDep, ContentFilterServiceDep
from chatty.core.exceptions import LLMError, ValidationError
from chatty.models.chat import (
    FilterContentRequest,
    FilterContentResponse,
    SubmitMessageRequest,
    SubmitMessageResult,
)

router = APIRouter()


@router.post("", response_model=SubmitMessageResult, response_model_exclude_none=True)
async def submit_message(
    request: SubmitMessageRequest,
    chat_service: ChatServiceDep,
):
    """
    Submit a prompt with an optional attachment.

    Returns either ``{response, suggestions, sentiment}`` or ``{error}``;
    errors are reported in the body, not as HTTP failures.
    """
    return await chat_service.submit_message(request.prompt, request.photo_data_uri)


@router.post("/filter", response_model=FilterContentResponse)
async def filter_content(
    request: FilterContentRequest,
    filter_service: ContentFilterServiceDep,
):
    """Check text for inappropriate content."""
    try:
        result = await filter_service.filter({"text": request.text})
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except LLMError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Content filter failed: {e.message}",
        ) from e

    return FilterContentResponse(
        is_appropriate=result.is_appropriate,
        filtered_text=result.filtered_text,
        blocked=result.blocked,
    )
