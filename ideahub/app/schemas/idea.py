"""Idea-related schemas."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from ideahub.app.core.config import settings
from ideahub.app.models.idea import IdeaCategory, CollaborationStatus


class SortOption(str, Enum):
    """Feed sort order."""
    NEWEST = "newest"
    OLDEST = "oldest"
    ALPHABETICAL = "alphabetical"
    MOST_LIKED = "most-liked"


class Collaborator(BaseModel):
    """Collaborator entry stored on an idea."""

    user_id: str = Field(..., description="Collaborator's user ID")
    name: str = Field(..., description="Collaborator's display name")
    email: str = Field(..., description="Collaborator's email")
    github: str | None = Field(None, description="GitHub link")
    linkedin: str | None = Field(None, description="LinkedIn link")


class IdeaCreate(BaseModel):
    """Schema for creating a new idea."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=settings.max_title_length,
        description="Idea title"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=settings.max_description_length,
        description="Idea description"
    )
    category: IdeaCategory = Field(..., description="Idea category")
    author_id: str = Field(..., min_length=1, description="Author's user ID (must match the caller)")
    author_name: str = Field(..., min_length=1, description="Author's display name")
    author_email: str = Field(..., min_length=1, description="Author's email")
    tags: list[str] = Field(default_factory=list, description="Tags")
    collaboration_status: CollaborationStatus = Field(
        CollaborationStatus.LOOKING_FOR_PARTNER,
        description="lfp (looking for partner) or gave-up (open for taking)"
    )


class IdeaUpdate(BaseModel):
    """Schema for updating an idea. Identity fields are not accepted."""

    title: str | None = Field(None, min_length=1, max_length=settings.max_title_length)
    description: str | None = Field(None, min_length=1, max_length=settings.max_description_length)
    category: IdeaCategory | None = None
    tags: list[str] | None = None
    collaboration_status: CollaborationStatus | None = None

    model_config = {"extra": "forbid"}


class IdeaFilters(BaseModel):
    """Feed filters."""

    category: IdeaCategory | None = Field(None, description="Only ideas in this category")
    search: str | None = Field(None, description="Case-insensitive match on title, description or tags")
    sort_by: SortOption = Field(SortOption.NEWEST, description="Sort order")


class IdeaResponse(BaseModel):
    """Schema for idea data in responses."""

    id: str = Field(..., description="Idea ID")
    title: str = Field(..., description="Idea title")
    description: str = Field(..., description="Idea description")
    category: IdeaCategory = Field(..., description="Idea category")
    author_id: str = Field(..., description="Author's user ID")
    author_name: str = Field(..., description="Author's display name")
    author_email: str = Field(..., description="Author's email")
    tags: list[str] = Field(default_factory=list, description="Tags")
    likes: int = Field(0, description="Like count")
    comments: int = Field(0, description="Comment count")
    collaboration_status: CollaborationStatus | None = Field(None, description="Collaboration status")
    collaborators: list[Collaborator] = Field(default_factory=list, description="Accepted collaborators")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class IdeaListResponse(BaseModel):
    """Schema for idea list."""

    ideas: list[IdeaResponse] = Field(..., description="List of ideas")
    total: int = Field(..., description="Number of ideas returned")
