"""
Chat session ORM model.

A saved AI assistant conversation owned by one user.

Dependencies: sqlalchemy, studyhub.boundary.db.base
System role: Chat transcript persistence
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from studyhub.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChatSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat session row.

    Attributes:
        user_id: Owning user
        title: Display title
        topic: Topic the conversation was about
        messages: Ordered list of {role, content, timestamp} records
    """

    __tablename__ = "chat_sessions"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    topic: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    messages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
