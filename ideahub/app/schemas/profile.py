"""Profile-related schemas."""

from datetime import datetime
from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """Schema for editing a profile. Links are free-form strings."""

    display_name: str | None = Field(None, min_length=1, max_length=255, description="Display name")
    github: str | None = Field(None, max_length=512, description="GitHub link")
    linkedin: str | None = Field(None, max_length=512, description="LinkedIn link")
    twitter: str | None = Field(None, max_length=512, description="Twitter link")
    website: str | None = Field(None, max_length=512, description="Personal website")

    model_config = {"extra": "forbid"}


class GitHubRepo(BaseModel):
    """Repository summary pulled from GitHub."""

    name: str
    description: str | None = None
    url: str
    language: str | None = None
    stars: int = 0


class ProfileResponse(BaseModel):
    """Schema for profile data in responses."""

    uid: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    display_name: str = Field(..., description="Display name")
    github: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    website: str | None = None
    github_username: str | None = None
    github_name: str | None = None
    github_bio: str | None = None
    github_avatar: str | None = None
    github_url: str | None = None
    github_public_repos: int | None = None
    github_followers: int | None = None
    github_repos: list[GitHubRepo] | None = None
    github_linked_at: datetime | None = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class GitHubLinkRequest(BaseModel):
    """OAuth code returned by GitHub to the redirect URI."""

    code: str = Field(..., min_length=1, description="OAuth authorization code")


class AuthorNameResync(BaseModel):
    """Result of re-running the author name fan-out."""

    uid: str = Field(..., description="User ID")
    display_name: str = Field(..., description="Name written to the user's ideas")
    ideas_updated: int = Field(..., description="Number of ideas whose author name changed")
