"""
Security event ORM model.

Append-only audit log of security-relevant events.

Dependencies: sqlalchemy, studyhub.boundary.db.base
System role: Audit log persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.boundary.db.base import Base, UUIDMixin, utcnow


class SecurityEventModel(Base, UUIDMixin):
    """
    Security event row. Rows are inserted once and never updated.

    Attributes:
        event_type: One of the SecurityEventType values
        user_id: Affected user, NULL for anonymous events
        details: Event-specific key-value data
        occurred_at: When the event was detected (UTC)
    """

    __tablename__ = "security_events"

    event_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
