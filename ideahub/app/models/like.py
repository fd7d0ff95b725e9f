"""Like model."""

import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from ideahub.app.db.base import Base


class Like(Base):
    """
    Like model representing a user's like on an idea.

    Attributes:
        id: Unique like identifier (UUID)
        idea_id: Liked idea ID
        user_id: Liking user's ID
        liked_at: Creation timestamp
    """

    __tablename__ = "likes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    idea_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    liked_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )

    # Unique constraint: one like per user per idea
    __table_args__ = (
        Index("idx_like_unique", "idea_id", "user_id", unique=True),
    )

    def __repr__(self) -> str:
        return f"<Like(idea_id={self.idea_id}, user_id={self.user_id})>"
