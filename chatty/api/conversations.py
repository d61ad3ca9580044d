"""
Conversations API endpoint.

Stateful chat: submissions go into the active conversation kept by the
conversation store, and every response carries the resulting view state.
"""

import json
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from chatty.api.deps import ChatViewServiceDep
from chatty.core.exceptions import NotFoundError
from chatty.core.logger import logger
from chatty.models.chat import ChatViewState, ConversationMessageRequest, SuggestionClickRequest
from chatty.models.enums import StreamChunkType

router = APIRouter()


@router.get("", response_model=ChatViewState)
async def get_view(view_service: ChatViewServiceDep):
    """Get the conversation list and the active conversation."""
    return view_service.view()


@router.post("/messages", response_model=ChatViewState)
async def submit_message(
    request: ConversationMessageRequest,
    view_service: ChatViewServiceDep,
):
    """
    Submit a message into the active conversation.

    A conversation is created when none is active. Failures are reported in
    ``error`` and leave the conversation as it was before the submission.
    """
    return await view_service.submit(
        request.prompt,
        photo_data_uri=request.photo_data_uri,
        attachment_name=request.attachment_name,
    )


@router.post("/suggestions", response_model=ChatViewState)
async def click_suggestion(
    request: SuggestionClickRequest,
    view_service: ChatViewServiceDep,
):
    """Submit a suggestion chip as the next message."""
    return await view_service.click_suggestion(request.suggestion)


@router.post("/messages/stream")
async def submit_message_stream(
    request: ConversationMessageRequest,
    view_service: ChatViewServiceDep,
):
    """
    Submit a message with streaming progress (Server-Sent Events).

    Events: user_message, typing, then assistant_message or error, then done.
    """

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate Server-Sent Events for the submission."""
        try:
            async for chunk in view_service.submit_stream(
                request.prompt,
                photo_data_uri=request.photo_data_uri,
                attachment_name=request.attachment_name,
            ):
                yield f"data: {chunk.model_dump_json(exclude_none=True)}\n\n"

        except Exception as e:
            logger.error(f"Streaming submission failed: {e}")
            error_chunk = {
                "chunk_type": StreamChunkType.ERROR.value,
                "content": str(e),
            }
            yield f"data: {json.dumps(error_chunk, ensure_ascii=False)}\n\n"

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable buffering for nginx
        },
    )


@router.post("/new", response_model=ChatViewState)
async def start_new_conversation(view_service: ChatViewServiceDep):
    """Clear the active selection; existing conversations are kept."""
    return view_service.start_new_conversation()


@router.post("/{conversation_id}/select", response_model=ChatViewState)
async def select_conversation(
    conversation_id: str,
    view_service: ChatViewServiceDep,
):
    """Switch to a stored conversation."""
    try:
        return view_service.switch_conversation(conversation_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        ) from e
