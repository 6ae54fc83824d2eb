"""
Security layer.

Sanitization, validation, prompt-injection rules, rate limiting,
security event monitoring and session inactivity tracking.
"""

from studyhub.core.security.injection_rules import (
    INJECTION_RULES,
    find_injection_matches,
    is_suspicious,
)
from studyhub.core.security.monitor import AuditSink, SecurityMonitor
from studyhub.core.security.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimitEntry,
    RateLimiter,
    RateLimitStore,
    chat_rate_key,
    check_rate_limit,
    generate_rate_key,
    get_rate_limiter,
)
from studyhub.core.security.sanitizer import sanitize_content_recursively, sanitize_html
from studyhub.core.security.session_timeout import (
    AsyncioScheduler,
    Scheduler,
    SessionState,
    SessionTimeoutMonitor,
)
from studyhub.core.security.validators import (
    validate_ai_input,
    validate_chat_message,
    validate_file_upload,
    validate_flashcard_content,
    validate_tags,
    validate_text_upload,
)

__all__ = [
    "INJECTION_RULES",
    "find_injection_matches",
    "is_suspicious",
    "AuditSink",
    "SecurityMonitor",
    "InMemoryRateLimitStore",
    "RateLimitEntry",
    "RateLimiter",
    "RateLimitStore",
    "chat_rate_key",
    "check_rate_limit",
    "generate_rate_key",
    "get_rate_limiter",
    "sanitize_content_recursively",
    "sanitize_html",
    "AsyncioScheduler",
    "Scheduler",
    "SessionState",
    "SessionTimeoutMonitor",
    "validate_ai_input",
    "validate_chat_message",
    "validate_file_upload",
    "validate_flashcard_content",
    "validate_tags",
    "validate_text_upload",
]
