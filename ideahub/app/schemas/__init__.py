"""Pydantic schemas for API request/response validation."""

from ideahub.app.schemas.idea import (
    SortOption,
    Collaborator,
    IdeaCreate,
    IdeaUpdate,
    IdeaFilters,
    IdeaResponse,
    IdeaListResponse,
)
from ideahub.app.schemas.engagement import (
    LikeStatus,
    CommentCreate,
    CommentResponse,
    CommentListResponse,
    EngagementSnapshot,
)
from ideahub.app.schemas.collaboration import (
    CollaborationRequestCreate,
    CollaborationRequestResponse,
    CollaborationRequestListResponse,
    CollaborationAcceptResponse,
)
from ideahub.app.schemas.profile import (
    ProfileUpdate,
    ProfileResponse,
    GitHubRepo,
    GitHubLinkRequest,
    AuthorNameResync,
)

__all__ = [
    "SortOption",
    "Collaborator",
    "IdeaCreate",
    "IdeaUpdate",
    "IdeaFilters",
    "IdeaResponse",
    "IdeaListResponse",
    "LikeStatus",
    "CommentCreate",
    "CommentResponse",
    "CommentListResponse",
    "EngagementSnapshot",
    "CollaborationRequestCreate",
    "CollaborationRequestResponse",
    "CollaborationRequestListResponse",
    "CollaborationAcceptResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "GitHubRepo",
    "GitHubLinkRequest",
    "AuthorNameResync",
]
