"""User profile model."""

from datetime import datetime
from sqlalchemy import String, Text, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ideahub.app.db.base import Base


class UserProfile(Base):
    """
    User-facing profile attributes.

    Attributes:
        uid: User ID from the identity provider
        email: Email address (immutable)
        display_name: Display name, copied onto the user's ideas
        github: GitHub link
        linkedin: LinkedIn link
        twitter: Twitter link
        website: Personal website
        github_*: Data pulled from a linked GitHub account
        created_at: Creation timestamp (first sign-in)
        updated_at: Last edit timestamp
    """

    __tablename__ = "profiles"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    github: Mapped[str | None] = mapped_column(String(512), nullable=True)
    linkedin: Mapped[str | None] = mapped_column(String(512), nullable=True)
    twitter: Mapped[str | None] = mapped_column(String(512), nullable=True)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Linked GitHub account
    github_username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    github_public_repos: Mapped[int | None] = mapped_column(Integer, nullable=True)
    github_followers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    github_repos: Mapped[list[dict] | None] = mapped_column(
        JSON,
        nullable=True,
        comment="Recently updated repositories [{name, description, url, language, stars}, ...]",
    )
    github_linked_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    def __repr__(self) -> str:
        return f"<UserProfile(uid={self.uid}, display_name={self.display_name})>"
