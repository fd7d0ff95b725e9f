"""Collaboration request model."""

import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from ideahub.app.db.base import Base


class RequestStatus(str, Enum):
    """Collaboration request status enum. Accepted and rejected are terminal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CollaborationRequest(Base):
    """
    Request from a non-author to join an idea's collaborators.

    Attributes:
        id: Unique request identifier (UUID)
        idea_id: Target idea ID
        requester_id: Requesting user's ID
        requester_name: Requester's display name at submission time
        requester_email: Requester's email
        requester_github: Requester's GitHub link (optional)
        requester_linkedin: Requester's LinkedIn link (optional)
        message: Optional note to the idea's author
        status: pending/accepted/rejected
        created_at: Submission timestamp
        decided_at: Timestamp of the accept/reject decision
    """

    __tablename__ = "collaboration_requests"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    idea_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    requester_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    requester_name: Mapped[str] = mapped_column(String(255), nullable=False)
    requester_email: Mapped[str] = mapped_column(String(255), nullable=False)
    requester_github: Mapped[str | None] = mapped_column(String(512), nullable=True)
    requester_linkedin: Mapped[str | None] = mapped_column(String(512), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=RequestStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )
    decided_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<CollaborationRequest(id={self.id}, idea_id={self.idea_id}, "
            f"requester_id={self.requester_id}, status={self.status})>"
        )
