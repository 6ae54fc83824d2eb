"""
Notification schemas.

User-visible toast notices produced by services and returned to the
client alongside API responses.

Dependencies: pydantic
System role: Notification contract
"""

from typing import Literal

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """Single toast notice."""

    title: str = Field(description="Short headline")
    description: str = Field(description="Body text")
    variant: Literal["default", "destructive"] = Field(
        default="default",
        description="Visual severity of the notice",
    )
