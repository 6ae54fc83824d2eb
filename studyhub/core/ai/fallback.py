"""
Fallback content synthesizer.

Builds placeholder content in the requested shape when the model's reply
cannot be parsed, so callers always receive a well-formed document.
Pure and deterministic.

Dependencies: studyhub.core.ai.content_schema
System role: Parse-failure recovery for generated content
"""

from typing import Any

from studyhub.core.ai.content_schema import (
    ContentType,
    Difficulty,
    clamp_count,
    normalize_content_type,
)


def create_fallback_content(
    content_type: ContentType | str,
    response: str,
    topic: str,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    count: int = 5,
) -> dict[str, Any]:
    """
    Synthesize placeholder content for a topic.

    Args:
        content_type: Requested content type
        response: Sanitized raw reply, kept verbatim for text-only types
        topic: Sanitized topic
        difficulty: Difficulty level (accepted for signature parity)
        count: Number of items, clamped into [1, 20]

    Returns:
        dict: Content matching the fallback schema for content_type
    """
    content_type = normalize_content_type(content_type)
    count = clamp_count(count)

    if content_type == ContentType.FLASHCARDS:
        return {
            "flashcards": [
                {
                    "question": f"What is the key concept {i + 1} about {topic}?",
                    "answer": f"This is a detailed answer about {topic} concept {i + 1}.",
                    "hint": f"Remember the importance of {topic} in this context.",
                }
                for i in range(count)
            ]
        }

    if content_type == ContentType.MINDMAPS:
        return {
            "mindmap": {
                "central_topic": topic,
                "branches": [
                    {
                        "title": "Main Concept",
                        "subtopics": ["Subtopic 1", "Subtopic 2"],
                        "details": f"Key aspects of {topic}",
                    }
                ],
            }
        }

    if content_type == ContentType.QUIZZES:
        return {
            "quiz": [
                {
                    "question": f"Quiz question {i + 1} about {topic}?",
                    "options": ["Option A", "Option B", "Option C", "Option D"],
                    "correct_answer": 0,
                    "explanation": f"Explanation for question {i + 1} about {topic}.",
                }
                for i in range(count)
            ]
        }

    return {"content": response or f"Study material about {topic}."}
