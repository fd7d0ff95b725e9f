"""Idea model."""

import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Text, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ideahub.app.db.base import Base


class IdeaCategory(str, Enum):
    """Idea category enum."""
    APP = "app-idea"
    BUSINESS = "business-idea"
    WEBSITE = "website-idea"
    PRODUCT = "product-idea"
    SERVICE = "service-idea"
    TECH = "tech-idea"
    SOCIAL = "social-idea"
    EDUCATION = "education-idea"
    HEALTH = "health-idea"
    FINANCE = "finance-idea"
    ENTERTAINMENT = "entertainment-idea"
    OTHER = "other"


class CollaborationStatus(str, Enum):
    """Whether the author wants partners or has abandoned the idea."""
    LOOKING_FOR_PARTNER = "lfp"
    GAVE_UP = "gave-up"


class Idea(Base):
    """
    Idea model representing a user-submitted proposal.

    Attributes:
        id: Unique idea identifier (UUID)
        title: Short title
        description: Full description
        category: One of IdeaCategory
        author_id: Author's user ID (immutable)
        author_name: Denormalized copy of the author's display name
        author_email: Author's email (immutable)
        tags: List of tags
        likes: Like counter, kept in step with the like set
        comments: Comment counter, kept in step with the comment log
        collaboration_status: One of CollaborationStatus
        collaborators: JSON array of {user_id, name, email, github, linkedin}
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "ideas"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    author_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    collaboration_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    collaborators: Mapped[list[dict]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Collaborators [{user_id, name, email, github, linkedin}, ...]",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<Idea(id={self.id}, title={self.title[:50]}, "
            f"author_id={self.author_id})>"
        )
