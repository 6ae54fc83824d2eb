"""
Caller identity model.

Identity of the caller as asserted by the upstream auth gateway.

Dependencies: pydantic
System role: Request identity contract
"""

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Caller identity; user_id is None for anonymous callers."""

    user_id: str | None = None
    user_type: str = "anonymous"

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
