"""
Security configuration settings.

Rate limits, session inactivity timeouts, and input/upload size limits.
Defaults match the limits the client application has always enforced.

Dependencies: pydantic_settings
System role: Security policy configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studyhub.configs.base import BaseSettings


class SecuritySettings(BaseSettings):
    """Security policy limits."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SECURITY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Rate limits
    chat_max_requests: int = Field(default=20, description="Chat messages per window")
    chat_window_ms: int = Field(default=60_000, description="Chat rate-limit window")
    generate_max_requests: int = Field(default=10, description="Content generations per window")
    generate_window_ms: int = Field(default=3_600_000, description="Generation rate-limit window")
    rate_limit_sweep_interval_s: float = Field(
        default=300.0,
        description="Seconds between sweeps of expired rate-limit entries",
    )

    # Session inactivity
    session_warning_ms: int = Field(default=1_800_000, description="Idle time before warning")
    session_expiry_ms: int = Field(default=2_100_000, description="Idle time before sign-out")

    # Input limits
    ai_input_max_length: int = Field(default=5000, description="Max characters of AI input")
    tag_max_length: int = Field(default=20, description="Max characters per flashcard tag")
    max_tags: int = Field(default=10, description="Max tags per flashcard")
    text_upload_max_chars: int = Field(default=50_000, description="Max characters of text upload")
    upload_max_bytes: int = Field(default=10 * 1024 * 1024, description="Max generic upload size")
