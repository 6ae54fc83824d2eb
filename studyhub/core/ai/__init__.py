"""
AI study content module.

Content schemas, prompt templates, reply parsing and fallback synthesis.
"""

from studyhub.core.ai.content_schema import (
    ContentType,
    Difficulty,
    clamp_count,
    normalize_content_type,
    normalize_difficulty,
    validate_generated_content,
)
from studyhub.core.ai.fallback import create_fallback_content
from studyhub.core.ai.response_parser import parse_ai_response

__all__ = [
    "ContentType",
    "Difficulty",
    "clamp_count",
    "normalize_content_type",
    "normalize_difficulty",
    "validate_generated_content",
    "create_fallback_content",
    "parse_ai_response",
]
