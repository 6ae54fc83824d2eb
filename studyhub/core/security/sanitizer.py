"""
HTML sanitization for user and AI supplied text.

Pattern-based removal of script/iframe/object blocks, stray script
openers, embed tags, javascript: URIs and inline event-handler
attributes. This is not an HTML parser: obfuscated or malformed markup
can get through, so output must still be escaped by whatever renders it.

Dependencies: re (stdlib)
System role: Text neutralization before rendering or prompting
"""

import re
from typing import Any

_SANITIZE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE),
    re.compile(r"<script[^>]*>?", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>", re.IGNORECASE),
    re.compile(r"<object\b[^<]*(?:(?!</object>)<[^<]*)*</object>", re.IGNORECASE),
    re.compile(r"<embed[^>]*>", re.IGNORECASE),
)


def _sanitize_once(text: str) -> str:
    for pattern in _SANITIZE_PATTERNS:
        text = pattern.sub("", text)
    return text


def sanitize_html(text: str) -> str:
    """
    Strip dangerous markup from text.

    Substitutions are repeated until the text stops changing, so removing
    one match cannot splice together a new one (e.g. "jajavascript:vascript:").
    The result is therefore stable under a second call.

    Args:
        text: Raw text

    Returns:
        str: Text with none of the blocked patterns
    """
    previous = None
    while previous != text:
        previous = text
        text = _sanitize_once(text)
    return text


def sanitize_content_recursively(obj: Any) -> Any:
    """
    Sanitize every string inside a JSON-like structure.

    Dicts and lists are walked; other values pass through unchanged.

    Args:
        obj: Parsed JSON value

    Returns:
        Any: Structure of the same shape with sanitized strings
    """
    if isinstance(obj, str):
        return sanitize_html(obj)
    if isinstance(obj, list):
        return [sanitize_content_recursively(item) for item in obj]
    if isinstance(obj, dict):
        return {key: sanitize_content_recursively(value) for key, value in obj.items()}
    return obj
