"""
Security domain models and schemas.

Security events written to the audit log and request/response schemas
for the security endpoints.

Dependencies: pydantic
System role: Security event and API contracts
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from studyhub.models.notification import Notification


class SecurityEventType(str, Enum):
    """Kinds of security-relevant events."""

    FAILED_AUTH = "failed_auth"
    SUSPICIOUS_AI_PROMPT = "suspicious_ai_prompt"
    FILE_UPLOAD_FAILURE = "file_upload_failure"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SESSION_TIMEOUT_WARNING = "session_timeout_warning"


class SecurityEvent(BaseModel):
    """Immutable record of a detected security event."""

    model_config = {"frozen": True}

    type: SecurityEventType
    user_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FailedAuthRequest(BaseModel):
    """Report of a failed sign-in attempt."""

    error: str = Field(max_length=500, description="Error returned by the auth provider")


class FileUploadFailureRequest(BaseModel):
    """Report of a rejected or failed upload."""

    file_name: str = Field(max_length=255)
    error: str = Field(max_length=500)


class SessionStatusResponse(BaseModel):
    """Inactivity state of the caller's session."""

    state: str
    last_activity: float | None = None
    notifications: list[Notification] = Field(default_factory=list)


class UploadValidationResponse(BaseModel):
    """Result of validating an upload."""

    accepted: bool
    file_name: str | None = None
    characters: int | None = None
    notifications: list[Notification] = Field(default_factory=list)
