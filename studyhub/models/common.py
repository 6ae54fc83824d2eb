"""
Common response models.

Error schema shared by all routers.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field

from studyhub.models.notification import Notification


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message safe to show to users")
    code: str = Field(default="GENERIC_ERROR", description="Machine-readable error code")
    notifications: list[Notification] = Field(default_factory=list)
