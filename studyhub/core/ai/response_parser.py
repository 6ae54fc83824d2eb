"""
AI reply parser.

Pulls a JSON document out of free-form model output: a fenced ```json
block first, otherwise the span from the first "{" to the last "}",
and finally the whole reply.

Dependencies: json, re (stdlib)
System role: Completion output decoding
"""

import json
import re
from typing import Any

from studyhub.core.exceptions import ContentParseError

_FENCED_JSON = re.compile(r"```json\n?(.*?)\n?```", re.DOTALL)
_BRACED_JSON = re.compile(r"\{[\s\S]*\}")


def extract_json_payload(text: str) -> str | None:
    """
    Find the most likely JSON substring in a reply.

    Args:
        text: Raw model output

    Returns:
        str | None: Candidate JSON text, or None when nothing looks like JSON
    """
    fenced = _FENCED_JSON.search(text)
    if fenced:
        return fenced.group(1)
    braced = _BRACED_JSON.search(text)
    if braced:
        return braced.group(0)
    return None


def parse_ai_response(text: str) -> dict[str, Any]:
    """
    Parse a model reply into a JSON object.

    Args:
        text: Raw model output

    Returns:
        dict: Parsed JSON object

    Raises:
        ContentParseError: No candidate parses to a JSON object
    """
    candidates = []
    payload = extract_json_payload(text)
    if payload is not None:
        candidates.append(payload)
    candidates.append(text)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ContentParseError(
        "AI response is not a JSON object",
        details={"length": len(text) if isinstance(text, str) else 0},
    )
