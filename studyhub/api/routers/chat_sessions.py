"""Chat session API endpoints.

Routes:
- POST /chat-sessions - Save a conversation
- GET /chat-sessions - List saved conversations
- GET /chat-sessions/{session_id} - Get a saved conversation
- PATCH /chat-sessions/{session_id} - Update title, topic or transcript
- DELETE /chat-sessions/{session_id} - Delete a saved conversation

Dependencies: studyhub.application.services.chat_session_service
System role: Chat session HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studyhub.api.deps import get_chat_session_service
from studyhub.application.services.chat_session_service import ChatSessionService
from studyhub.core.exceptions import ChatSessionNotFoundError
from studyhub.core.security.sanitizer import sanitize_html
from studyhub.models.chat_session import (
    ChatSessionResponse,
    CreateChatSessionRequest,
    UpdateChatSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat-sessions", tags=["chat-sessions"])


@router.post("", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
async def save_chat_session(
    request: CreateChatSessionRequest,
    service: ChatSessionService = Depends(get_chat_session_service),
) -> ChatSessionResponse:
    """Save a conversation."""
    result = await service.save_session(
        title=sanitize_html(request.title),
        topic=sanitize_html(request.topic),
        messages=request.messages,
    )
    return ChatSessionResponse(**result)


@router.get("", response_model=list[ChatSessionResponse])
async def list_chat_sessions(
    limit: int | None = Query(default=None, ge=1, le=100),
    service: ChatSessionService = Depends(get_chat_session_service),
) -> list[ChatSessionResponse]:
    """List saved conversations, most recently updated first."""
    results = await service.list_sessions(limit=limit)
    return [ChatSessionResponse(**r) for r in results]


@router.get("/{session_id}", response_model=ChatSessionResponse)
async def get_chat_session(
    session_id: UUID,
    service: ChatSessionService = Depends(get_chat_session_service),
) -> ChatSessionResponse:
    """Get a saved conversation.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        result = await service.get_session(session_id)
    except ChatSessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ChatSessionResponse(**result)


@router.patch("/{session_id}", response_model=ChatSessionResponse)
async def update_chat_session(
    session_id: UUID,
    request: UpdateChatSessionRequest,
    service: ChatSessionService = Depends(get_chat_session_service),
) -> ChatSessionResponse:
    """Update a saved conversation.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        result = await service.update_session(
            session_id,
            title=sanitize_html(request.title) if request.title is not None else None,
            topic=sanitize_html(request.topic) if request.topic is not None else None,
            messages=request.messages,
        )
    except ChatSessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ChatSessionResponse(**result)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_session(
    session_id: UUID,
    service: ChatSessionService = Depends(get_chat_session_service),
) -> None:
    """Delete a saved conversation.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        await service.delete_session(session_id)
    except ChatSessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
