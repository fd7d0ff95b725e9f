"""Like and comment schemas."""

from datetime import datetime
from pydantic import BaseModel, Field

from ideahub.app.core.config import settings


class LikeStatus(BaseModel):
    """Like membership of the caller plus the live count."""

    idea_id: str = Field(..., description="Idea ID")
    liked: bool = Field(..., description="Whether the caller likes the idea")
    like_count: int = Field(..., description="Number of likes")


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=settings.max_comment_length,
        description="Comment text"
    )


class CommentResponse(BaseModel):
    """Schema for comment data in responses."""

    id: str = Field(..., description="Comment ID")
    idea_id: str = Field(..., description="Parent idea ID")
    author_id: str = Field(..., description="Author's user ID")
    author_name: str = Field(..., description="Author's display name")
    text: str = Field(..., description="Comment text")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {"from_attributes": True}


class CommentListResponse(BaseModel):
    """Schema for comment list."""

    comments: list[CommentResponse] = Field(..., description="Comments, oldest first")
    total: int = Field(..., description="Total number of comments")


class EngagementSnapshot(BaseModel):
    """Full engagement state pushed to subscribers."""

    idea_id: str = Field(..., description="Idea ID")
    like_count: int = Field(..., description="Number of likes")
    liked_by: list[str] = Field(..., description="User IDs that like the idea")
    comment_count: int = Field(..., description="Number of comments")
