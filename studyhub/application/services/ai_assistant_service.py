"""
AI assistant service for study content generation and chat.

Orchestrates the guarded generation flow: input validation, prompt
monitoring, sanitization, rate limiting, completion, parsing with
fallback, and output sanitization. Chat keeps a per-user transcript and
sends a bounded window of prior turns as context.

Dependencies: studyhub.core.security, studyhub.core.ai, studyhub.boundary.llm
System role: AI assistant orchestration layer
"""

import logging
from collections import defaultdict
from typing import Any

from studyhub.boundary.llm.completion_client import CompletionClient
from studyhub.configs.security import SecuritySettings
from studyhub.core.ai.content_prompts import build_chat_messages, build_generation_messages
from studyhub.core.ai.content_schema import (
    Difficulty,
    clamp_count,
    normalize_content_type,
    normalize_difficulty,
    validate_fallback_content,
    validate_generated_content,
)
from studyhub.core.ai.fallback import create_fallback_content
from studyhub.core.ai.response_parser import parse_ai_response
from studyhub.core.exceptions import ContentParseError, create_safe_error
from studyhub.core.notifier import Notifier
from studyhub.core.security.monitor import SecurityMonitor
from studyhub.core.security.rate_limiter import (
    RateLimiter,
    chat_rate_key,
    generate_rate_key,
    get_rate_limiter,
)
from studyhub.core.security.sanitizer import sanitize_content_recursively, sanitize_html
from studyhub.core.security.validators import validate_ai_input
from studyhub.models.ai import ChatMessage

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_WINDOW = 10


class ConversationStore:
    """In-process chat transcripts keyed by user."""

    def __init__(self) -> None:
        self._transcripts: dict[str, list[ChatMessage]] = defaultdict(list)

    def transcript(self, user_key: str) -> list[ChatMessage]:
        return self._transcripts[user_key]

    def clear(self, user_key: str | None = None) -> None:
        if user_key is None:
            self._transcripts.clear()
        else:
            self._transcripts.pop(user_key, None)


class AIAssistantService:
    """
    AI assistant for one (possibly anonymous) user.

    Blocked prompts and rate-limit denials are reported through the
    notifier and yield no content. Completion failures during generation
    are reported and re-raised; chat failures are reported only.
    """

    def __init__(
        self,
        completion_client: CompletionClient,
        security_monitor: SecurityMonitor,
        notifier: Notifier,
        user_id: str | None = None,
        rate_limiter: RateLimiter | None = None,
        transcript: list[ChatMessage] | None = None,
        settings: SecuritySettings | None = None,
        context_window: int = DEFAULT_CONTEXT_WINDOW,
        is_development: bool = False,
    ) -> None:
        """
        Initialize AI assistant service.

        Args:
            completion_client: External completion service client
            security_monitor: Prompt monitor and event recorder for the user
            notifier: Sink for user-visible notices
            user_id: Authenticated user, None for anonymous callers
            rate_limiter: Limiter shared across requests (process default when omitted)
            transcript: Mutable chat transcript owned by the caller
            settings: Security limits (defaults when omitted)
            context_window: Prior turns sent with each chat message
            is_development: Expose raw error messages in notices
        """
        self.completion_client = completion_client
        self.security_monitor = security_monitor
        self.notifier = notifier
        self.user_id = user_id
        self.rate_limiter = rate_limiter or get_rate_limiter()
        self.transcript = transcript if transcript is not None else []
        self.settings = settings or SecuritySettings()
        self.context_window = context_window
        self.is_development = is_development

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self.transcript)

    async def generate_content(
        self,
        content_type: str,
        topic: str,
        difficulty: str | Difficulty = Difficulty.MEDIUM,
        count: int = 5,
        subject: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Generate study content on a topic.

        Flow:
        1. Validate topic (length, injection rules)
        2. Monitor prompt; blocked prompts yield no content
        3. Sanitize topic and subject
        4. Rate limit per user
        5. Clamp count, difficulty and content type
        6. Call completion service with topic-anchored prompts
        7. Parse reply; fall back to synthesized content on parse failure
        8. Sanitize every string in the result

        Args:
            content_type: flashcards, mindmaps, quizzes, diagrams or notes
            topic: Topic to generate content about
            difficulty: easy, medium or hard
            count: Number of items, clamped to 1-20
            subject: Optional subject context

        Returns:
            dict | None: Sanitized content, None when blocked or rate limited

        Raises:
            ValidationError: If the topic fails validation
            ExternalServiceError: If the completion service fails
        """
        logger.info(f"{__name__}:generate_content - START type={content_type} user_id={self.user_id}")

        try:
            validated_topic = validate_ai_input(topic, max_length=self.settings.ai_input_max_length)

            if not await self.security_monitor.monitor_ai_prompt(validated_topic):
                logger.warning(f"{__name__}:generate_content - Prompt blocked by monitor")
                return None

            sanitized_topic = sanitize_html(validated_topic)
            sanitized_subject = sanitize_html(subject) if subject else None

            rate_key = generate_rate_key(self.user_id)
            if not self.rate_limiter.check(
                rate_key,
                self.settings.generate_max_requests,
                self.settings.generate_window_ms,
            ):
                logger.warning(f"{__name__}:generate_content - Rate limited key={rate_key}")
                self.notifier.notify(
                    "Rate Limit Exceeded",
                    "Please wait before generating more content.",
                    variant="destructive",
                )
                await self.security_monitor.monitor_rate_limit_exceeded(
                    rate_key,
                    retry_after_ms=self.rate_limiter.retry_after_ms(rate_key),
                )
                return None

            valid_type = normalize_content_type(content_type)
            valid_difficulty = normalize_difficulty(difficulty)
            valid_count = clamp_count(count)

            messages = build_generation_messages(
                valid_type, sanitized_topic, valid_difficulty, valid_count, sanitized_subject
            )
            raw_reply = await self.completion_client.acomplete(messages)
            logger.info(f"{__name__}:generate_content - Reply received len={len(raw_reply)}")

            try:
                parsed = parse_ai_response(raw_reply)
            except ContentParseError:
                logger.warning(f"{__name__}:generate_content - Unparseable reply, using fallback")
                fallback = create_fallback_content(
                    valid_type,
                    sanitize_html(raw_reply),
                    sanitized_topic,
                    valid_difficulty,
                    valid_count,
                )
                if not validate_fallback_content(valid_type, fallback):
                    logger.error(f"{__name__}:generate_content - Fallback does not match {valid_type.value} schema")
                return fallback

            if not validate_generated_content(valid_type, parsed):
                logger.warning(f"{__name__}:generate_content - Reply does not match {valid_type.value} schema")

            content = sanitize_content_recursively(parsed)
            logger.info(f"{__name__}:generate_content - DONE type={valid_type.value}")
            return content

        except Exception as e:
            logger.error(f"{__name__}:generate_content - Failed: {type(e).__name__}: {e}")
            safe_error = create_safe_error(str(e), "AI_GENERATE_ERROR", self.is_development)
            self.notifier.notify("Generation Failed", safe_error["message"], variant="destructive")
            raise

    async def send_message(self, message: str, subject: str | None = None) -> ChatMessage | None:
        """
        Send a chat message and append the exchange to the transcript.

        Args:
            message: User message
            subject: Optional subject context

        Returns:
            ChatMessage | None: Assistant reply, None when empty, blocked,
            rate limited or failed
        """
        if not message or not message.strip():
            return None

        logger.info(f"{__name__}:send_message - START user_id={self.user_id}")

        try:
            validated = validate_ai_input(message, max_length=self.settings.ai_input_max_length)

            if not await self.security_monitor.monitor_ai_prompt(validated):
                logger.warning(f"{__name__}:send_message - Prompt blocked by monitor")
                return None

            sanitized_message = sanitize_html(validated)
            sanitized_subject = sanitize_html(subject) if subject else None

            rate_key = chat_rate_key(self.user_id)
            if not self.rate_limiter.check(
                rate_key,
                self.settings.chat_max_requests,
                self.settings.chat_window_ms,
            ):
                logger.warning(f"{__name__}:send_message - Rate limited key={rate_key}")
                self.notifier.notify(
                    "Rate Limit Exceeded",
                    "Please wait before sending another message.",
                    variant="destructive",
                )
                await self.security_monitor.monitor_rate_limit_exceeded(
                    rate_key,
                    retry_after_ms=self.rate_limiter.retry_after_ms(rate_key),
                )
                return None

            history = [
                (turn.role, sanitize_html(turn.content))
                for turn in self.transcript[-self.context_window:]
            ]
            self.transcript.append(ChatMessage(role="user", content=sanitized_message))

            messages = build_chat_messages(sanitized_message, history, sanitized_subject)
            raw_reply = await self.completion_client.acomplete(messages)

            reply = ChatMessage(role="assistant", content=sanitize_html(raw_reply))
            self.transcript.append(reply)
            logger.info(f"{__name__}:send_message - DONE transcript_len={len(self.transcript)}")
            return reply

        except Exception as e:
            logger.error(f"{__name__}:send_message - Failed: {type(e).__name__}: {e}")
            safe_error = create_safe_error(str(e), "AI_CHAT_ERROR", self.is_development)
            self.notifier.notify("Error", safe_error["message"], variant="destructive")
            return None

    def clear_chat(self) -> None:
        """Discard the transcript."""
        self.transcript.clear()
