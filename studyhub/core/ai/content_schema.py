"""
Generated content schemas.

Content types, difficulty levels, request clamping, and the JSON shapes
the completion service is asked to produce for each content type.

Dependencies: pydantic
System role: Structured study-content definitions
"""

import logging
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

MIN_COUNT = 1
MAX_COUNT = 20


class ContentType(str, Enum):
    """Kinds of study content the assistant can generate."""

    FLASHCARDS = "flashcards"
    MINDMAPS = "mindmaps"
    QUIZZES = "quizzes"
    DIAGRAMS = "diagrams"
    NOTES = "notes"


class Difficulty(str, Enum):
    """Difficulty levels for generated content."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def normalize_content_type(value: Any) -> ContentType:
    """Map unknown content types to flashcards."""
    try:
        return ContentType(value)
    except ValueError:
        return ContentType.FLASHCARDS


def normalize_difficulty(value: Any) -> Difficulty:
    """Map unknown difficulty levels to medium."""
    try:
        return Difficulty(value)
    except ValueError:
        return Difficulty.MEDIUM


def clamp_count(count: Any) -> int:
    """Clamp the requested item count into [1, 20]."""
    try:
        value = int(count)
    except (TypeError, ValueError):
        return MIN_COUNT
    return max(MIN_COUNT, min(value, MAX_COUNT))


class Flashcard(BaseModel):
    question: str
    answer: str
    hint: str | None = None


class FlashcardSet(BaseModel):
    """{"flashcards": [...]}"""

    flashcards: list[Flashcard]


class MindMapBranch(BaseModel):
    title: str
    subtopics: list[str]
    details: str


class MindMap(BaseModel):
    central_topic: str
    branches: list[MindMapBranch]


class MindMapDocument(BaseModel):
    """{"mindmap": {...}}"""

    mindmap: MindMap


class QuizQuestion(BaseModel):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer: int = Field(ge=0, le=3)
    explanation: str


class QuizDocument(BaseModel):
    """{"quiz": [...]}"""

    quiz: list[QuizQuestion]


class DiagramComponent(BaseModel):
    id: str
    label: str
    description: str


class DiagramConnection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    relationship: str


class Diagram(BaseModel):
    title: str
    type: Literal["flowchart", "hierarchy", "process", "concept"]
    components: list[DiagramComponent]
    connections: list[DiagramConnection]


class DiagramDocument(BaseModel):
    """{"diagram": {...}}"""

    diagram: Diagram


class KeyPoint(BaseModel):
    heading: str
    content: str
    importance: Literal["high", "medium", "low"]


class Formula(BaseModel):
    name: str
    formula: str
    explanation: str


class Notes(BaseModel):
    title: str
    summary: str
    key_points: list[KeyPoint]
    formulas: list[Formula]
    quick_facts: list[str]


class NotesDocument(BaseModel):
    """{"notes": {...}}"""

    notes: Notes


class RawContent(BaseModel):
    """Unstructured reply kept as text."""

    content: str


CONTENT_SCHEMAS: dict[ContentType, type[BaseModel]] = {
    ContentType.FLASHCARDS: FlashcardSet,
    ContentType.MINDMAPS: MindMapDocument,
    ContentType.QUIZZES: QuizDocument,
    ContentType.DIAGRAMS: DiagramDocument,
    ContentType.NOTES: NotesDocument,
}

# Diagrams and notes fall back to raw text rather than a synthesized document.
FALLBACK_SCHEMAS: dict[ContentType, type[BaseModel]] = {
    **CONTENT_SCHEMAS,
    ContentType.DIAGRAMS: RawContent,
    ContentType.NOTES: RawContent,
}


def validate_generated_content(content_type: ContentType, data: Any) -> bool:
    """
    Check whether parsed content matches the schema for its type.

    Args:
        content_type: Requested content type
        data: Parsed reply

    Returns:
        bool: True if data validates against the type's schema
    """
    try:
        CONTENT_SCHEMAS[content_type].model_validate(data)
    except PydanticValidationError as e:
        logger.debug(f"{__name__}:validate_generated_content - {content_type.value}: {e.error_count()} errors")
        return False
    return True


def validate_fallback_content(content_type: ContentType, data: Any) -> bool:
    """Check synthesized fallback content; diagrams and notes carry raw text."""
    try:
        FALLBACK_SCHEMAS[content_type].model_validate(data)
    except PydanticValidationError as e:
        logger.debug(f"{__name__}:validate_fallback_content - {content_type.value}: {e.error_count()} errors")
        return False
    return True
