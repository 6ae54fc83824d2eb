"""
Structured logging helpers.

Context values are reduced to short, safe strings before they are
attached to a record: collections are summarized by size, long text is
truncated, and fields that carry user-written text (prompts, chat
messages, file contents) are logged as a length only.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_VALUE_CHARS = 500

# Keys whose values are user-written text
REDACTED_KEYS = frozenset({"prompt", "content", "topic", "password"})


def safe_log_value(value: Any, max_length: int = MAX_VALUE_CHARS) -> str:
    """
    Convert a value to a bounded string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value
        elif isinstance(value, (list, tuple)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    safe = {}
    for key, value in context.items():
        if key in REDACTED_KEYS and isinstance(value, str):
            safe[key] = f"<{len(value)} chars>"
        else:
            safe[key] = safe_log_value(value)
    return safe


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with context attached as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Key-value pairs; user-text keys are redacted
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context: Any,
) -> None:
    """Log an exception with traceback, error type and safe context."""
    extra = _safe_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
