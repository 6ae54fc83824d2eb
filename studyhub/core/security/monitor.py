"""
Security monitor.

Detects and records security-relevant events and gates AI prompts that
look like prompt-injection attempts. Events go to the application log
and to an append-only audit sink; a failing sink never breaks the caller.

Dependencies: studyhub.core.security.injection_rules, studyhub.core.notifier,
    studyhub.observability.log_utils
System role: Security event detection and audit logging
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from studyhub.core.notifier import Notifier
from studyhub.core.security.injection_rules import find_injection_matches
from studyhub.models.security import SecurityEvent, SecurityEventType
from studyhub.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_CHARS = 100


class AuditSink(ABC):
    """Append-only store for security events."""

    @abstractmethod
    async def write(self, event: SecurityEvent) -> None:
        """Persist one event."""


class SecurityMonitor:
    """
    Security event recorder bound to one (possibly anonymous) user.

    Emits notices through the injected Notifier and writes events to the
    injected AuditSink.
    """

    def __init__(
        self,
        notifier: Notifier,
        audit_sink: AuditSink | None = None,
        user_id: str | None = None,
    ) -> None:
        """
        Initialize security monitor.

        Args:
            notifier: Sink for user-visible notices
            audit_sink: Event store; events are only logged when omitted
            user_id: Authenticated user, None for anonymous callers
        """
        self.notifier = notifier
        self.audit_sink = audit_sink
        self.user_id = user_id

    async def log_security_event(self, event: SecurityEvent) -> None:
        """
        Record an event in the log and the audit sink.

        Sink failures are logged and swallowed.

        Args:
            event: Event to record
        """
        log_with_context(
            logger,
            logging.WARNING,
            f"Security event: {event.type.value}",
            event_type=event.type.value,
            user_id=event.user_id,
            details=event.details,
        )
        if self.audit_sink is None:
            return
        try:
            await self.audit_sink.write(event)
        except Exception:
            logger.exception(f"{__name__}:log_security_event - failed to write audit event")

    async def monitor_ai_prompt(self, prompt: str) -> bool:
        """
        Gate a prompt against the injection rules.

        Args:
            prompt: Text about to be sent to the completion service

        Returns:
            bool: True to allow, False when the prompt was blocked
        """
        matches = find_injection_matches(prompt)
        if not matches:
            return True

        await self.log_security_event(SecurityEvent(
            type=SecurityEventType.SUSPICIOUS_AI_PROMPT,
            user_id=self.user_id,
            details={
                "prompt": prompt[:PROMPT_PREVIEW_CHARS],
                "detected_patterns": len(matches),
            },
        ))
        self.notifier.notify(
            "Suspicious Input Detected",
            "Your input contains potentially harmful content and has been blocked.",
            variant="destructive",
        )
        return False

    async def monitor_failed_auth(self, error: str) -> None:
        """Record a failed sign-in attempt."""
        await self.log_security_event(SecurityEvent(
            type=SecurityEventType.FAILED_AUTH,
            details={"error": error, "timestamp": _epoch_ms()},
        ))

    async def monitor_file_upload(self, file_name: str, error: str) -> None:
        """Record a failed or rejected upload."""
        await self.log_security_event(SecurityEvent(
            type=SecurityEventType.FILE_UPLOAD_FAILURE,
            user_id=self.user_id,
            details={"fileName": file_name, "error": error, "timestamp": _epoch_ms()},
        ))

    async def monitor_rate_limit_exceeded(self, identifier: str, **details: Any) -> None:
        """Record a rate-limit denial."""
        await self.log_security_event(SecurityEvent(
            type=SecurityEventType.RATE_LIMIT_EXCEEDED,
            user_id=self.user_id,
            details={"identifier": identifier, "timestamp": _epoch_ms(), **details},
        ))


def _epoch_ms() -> int:
    return int(time.time() * 1000)
