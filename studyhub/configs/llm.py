"""
LLM configuration settings.

Settings for the external text-completion service used for chat
and study-content generation.

Dependencies: pydantic_settings
System role: Completion model configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studyhub.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Completion service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(
        default="gemini-2.5-flash",
        description="Chat model identifier",
    )
    api_key: str | None = Field(
        default=None,
        description="API key for the completion provider (falls back to GOOGLE_API_KEY)",
    )
    max_tokens: int = Field(default=1500, description="Maximum output tokens per reply")
    temperature: float = Field(
        default=0.1,
        description="Low temperature keeps generated content on topic",
    )
    context_window: int = Field(
        default=10,
        description="Number of prior chat turns sent as conversation context",
    )
