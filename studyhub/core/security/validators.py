"""
Input validators.

Shape, length and content checks for every piece of free text entering
the system. Each validator returns the accepted value or raises
ValidationError describing the first failing constraint.

Dependencies: pydantic, studyhub.core.security.injection_rules
System role: Boundary validation for user input
"""

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from studyhub.core.exceptions import ValidationError
from studyhub.core.security.injection_rules import is_suspicious
from studyhub.core.security.sanitizer import sanitize_html

ALLOWED_UPLOAD_TYPES = frozenset({
    "application/pdf",
    "text/plain",
    "image/jpeg",
    "image/png",
})
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_TEXT_UPLOAD_CHARS = 50_000
MAX_TAG_LENGTH = 20
MAX_TAGS = 10
AI_INPUT_MAX_LENGTH = 5000
CHAT_MESSAGE_MAX_LENGTH = 2000


class FlashcardContent(BaseModel):
    """Validated flashcard fields."""

    question: str = Field(min_length=1, max_length=1000)
    answer: str = Field(min_length=1, max_length=2000)
    tags: list[str] | None = None
    difficulty: Literal["easy", "medium", "hard"]


# (field, pydantic error type) -> message shown to the user
_FLASHCARD_MESSAGES = {
    ("question", "string_too_short"): "Question is required",
    ("question", "string_too_long"): "Question too long",
    ("answer", "string_too_short"): "Answer is required",
    ("answer", "string_too_long"): "Answer too long",
    ("difficulty", "literal_error"): "Difficulty must be easy, medium or hard",
}


def validate_flashcard_content(content: Any) -> dict[str, Any]:
    """
    Validate flashcard question, answer, difficulty and tags.

    Args:
        content: Mapping with question, answer, difficulty and optional tags

    Returns:
        dict: Validated content; tags is None when not supplied

    Raises:
        ValidationError: First failing constraint
    """
    try:
        flashcard = FlashcardContent.model_validate(content)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        message = _FLASHCARD_MESSAGES.get((field, first["type"]), first["msg"])
        raise ValidationError(message, field=field) from e

    result = flashcard.model_dump()
    if flashcard.tags is not None:
        result["tags"] = validate_tags(flashcard.tags)
    return result


def validate_chat_message(text: str) -> str:
    """
    Validate a chat message.

    Raises:
        ValidationError: Empty, longer than 2000 chars, or containing "<script"
    """
    if not isinstance(text, str) or len(text) < 1:
        raise ValidationError("Message cannot be empty", field="message")
    if len(text) > CHAT_MESSAGE_MAX_LENGTH:
        raise ValidationError("Message too long", field="message")
    if "<script" in text:
        raise ValidationError("Invalid content detected", field="message")
    return text


def validate_ai_input(text: str, max_length: int = AI_INPUT_MAX_LENGTH) -> str:
    """
    Validate text that will be sent to the completion service.

    Args:
        text: Topic or chat message
        max_length: Maximum accepted length

    Returns:
        str: The unchanged text

    Raises:
        ValidationError: Empty, too long, or matching a prompt-injection rule
    """
    if not isinstance(text, str) or len(text) < 1:
        raise ValidationError("Input is required", field="input")
    if len(text) > max_length:
        raise ValidationError("Input too long", field="input")
    if is_suspicious(text):
        raise ValidationError("Invalid input detected", field="input")
    return text


def validate_file_upload(file: Any, max_bytes: int = MAX_UPLOAD_BYTES) -> bool:
    """
    Validate an uploaded file's MIME type and size.

    Args:
        file: Object exposing ``content_type`` and ``size`` (e.g. UploadFile)
        max_bytes: Maximum accepted size

    Returns:
        bool: True when accepted

    Raises:
        ValidationError: Disallowed type or oversized file
    """
    content_type = getattr(file, "content_type", None)
    if content_type not in ALLOWED_UPLOAD_TYPES:
        raise ValidationError("File type not allowed", field="content_type")

    size = getattr(file, "size", None) or 0
    if size > max_bytes:
        raise ValidationError("File size too large", field="size")

    return True


def validate_text_upload(content: str, max_chars: int = MAX_TEXT_UPLOAD_CHARS) -> str:
    """Reject extracted text uploads longer than ``max_chars``."""
    if len(content) > max_chars:
        raise ValidationError(
            "File too large",
            field="content",
            details={"max_chars": max_chars, "length": len(content)},
        )
    return content


def normalize_tag(tag: str, max_length: int = MAX_TAG_LENGTH) -> str:
    """
    Sanitize and trim a single flashcard tag.

    Raises:
        ValidationError: Tag longer than ``max_length`` after sanitizing
    """
    cleaned = sanitize_html(tag.strip())
    if len(cleaned) > max_length:
        raise ValidationError(
            f"Tags must be {max_length} characters or less.",
            field="tags",
        )
    return cleaned


def validate_tags(
    tags: list[str],
    max_tags: int = MAX_TAGS,
    max_length: int = MAX_TAG_LENGTH,
) -> list[str]:
    """
    Normalize a tag list: empty and duplicate tags are dropped.

    Raises:
        ValidationError: A tag is too long or more than ``max_tags`` remain
    """
    result: list[str] = []
    for tag in tags:
        cleaned = normalize_tag(tag, max_length=max_length)
        if cleaned and cleaned not in result:
            result.append(cleaned)
    if len(result) > max_tags:
        raise ValidationError(f"At most {max_tags} tags allowed", field="tags")
    return result

