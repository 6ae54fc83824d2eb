"""
Prompt-injection rule table.

Single source of truth for the heuristics used by both input validation
and the security monitor, so the two cannot drift apart.

Dependencies: re (stdlib)
System role: Shared prompt-injection detection policy
"""

import re
from typing import NamedTuple


class InjectionRule(NamedTuple):
    """Named, compiled prompt-injection heuristic."""

    name: str
    pattern: re.Pattern[str]


INJECTION_RULES: tuple[InjectionRule, ...] = (
    InjectionRule("ignore_previous_instructions", re.compile(r"ignore.*previous.*instruction", re.IGNORECASE)),
    InjectionRule("system_prompt", re.compile(r"system.*prompt", re.IGNORECASE)),
    InjectionRule("you_are_now", re.compile(r"you.*are.*now", re.IGNORECASE)),
    InjectionRule("forget_everything", re.compile(r"forget.*everything", re.IGNORECASE)),
    InjectionRule("new_role", re.compile(r"new.*role", re.IGNORECASE)),
)


def find_injection_matches(text: str) -> list[str]:
    """
    Return the names of every rule the text matches.

    Args:
        text: Candidate prompt

    Returns:
        list[str]: Matching rule names, empty when the text looks clean
    """
    return [rule.name for rule in INJECTION_RULES if rule.pattern.search(text)]


def is_suspicious(text: str) -> bool:
    """Whether any injection rule matches the text."""
    return any(rule.pattern.search(text) for rule in INJECTION_RULES)
