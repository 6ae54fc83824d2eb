"""Completion service boundary."""

from studyhub.boundary.llm.completion_client import CompletionClient

__all__ = ["CompletionClient"]
