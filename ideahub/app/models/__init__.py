"""Database models."""

from ideahub.app.models.idea import Idea, IdeaCategory, CollaborationStatus
from ideahub.app.models.like import Like
from ideahub.app.models.comment import Comment
from ideahub.app.models.collaboration import CollaborationRequest, RequestStatus
from ideahub.app.models.profile import UserProfile

__all__ = [
    "Idea",
    "IdeaCategory",
    "CollaborationStatus",
    "Like",
    "Comment",
    "CollaborationRequest",
    "RequestStatus",
    "UserProfile",
]
