"""AI assistant API endpoints.

Routes:
- POST /ai/generate - Generate study content on a topic
- POST /ai/chat - Send a chat message
- GET /ai/chat - Current chat transcript
- DELETE /ai/chat - Clear the chat transcript

Blocked prompts and rate-limit denials answer 200 with no content and the
notices explaining why.

Dependencies: studyhub.application.services.ai_assistant_service
System role: AI assistant HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from studyhub.api.deps import (
    collect_notifications,
    get_ai_assistant_service,
    get_current_user,
    get_notifier,
)
from studyhub.application.services.ai_assistant_service import AIAssistantService
from studyhub.core.ai.content_schema import normalize_content_type
from studyhub.core.notifier import NotificationCollector
from studyhub.models.ai import (
    ChatRequest,
    ChatResponse,
    GenerateContentRequest,
    GenerateContentResponse,
)
from studyhub.models.user import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/generate", response_model=GenerateContentResponse)
async def generate_content(
    request: GenerateContentRequest,
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
    service: AIAssistantService = Depends(get_ai_assistant_service),
) -> GenerateContentResponse:
    """Generate study content.

    Args:
        request: Content type, topic, difficulty, count and subject
        user: Caller identity
        notifier: Per-request notice collector
        service: Injected AIAssistantService

    Returns:
        GenerateContentResponse: Content (null when blocked) and notices

    Raises:
        ValidationError: Topic failed validation (422 via exception handler)
        ExternalServiceError: Completion service failed (502 via exception handler)
    """
    content = await service.generate_content(
        content_type=request.content_type,
        topic=request.topic,
        difficulty=request.difficulty,
        count=request.count,
        subject=request.subject,
    )
    return GenerateContentResponse(
        content=content,
        content_type=normalize_content_type(request.content_type).value,
        notifications=collect_notifications(user, notifier),
    )


@router.post("/chat", response_model=ChatResponse)
async def send_chat_message(
    request: ChatRequest,
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
    service: AIAssistantService = Depends(get_ai_assistant_service),
) -> ChatResponse:
    """Send a chat message; failures are reported as notices."""
    reply = await service.send_message(request.message, subject=request.subject)
    return ChatResponse(
        reply=reply,
        messages=service.messages,
        notifications=collect_notifications(user, notifier),
    )


@router.get("/chat", response_model=ChatResponse)
async def get_chat(
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
    service: AIAssistantService = Depends(get_ai_assistant_service),
) -> ChatResponse:
    """Current chat transcript."""
    return ChatResponse(
        reply=None,
        messages=service.messages,
        notifications=collect_notifications(user, notifier),
    )


@router.delete("/chat", status_code=status.HTTP_204_NO_CONTENT)
async def clear_chat(service: AIAssistantService = Depends(get_ai_assistant_service)) -> None:
    """Clear the chat transcript."""
    service.clear_chat()
