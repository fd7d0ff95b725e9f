"""Profile API endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideahub.app.core.exceptions import AuthError
from ideahub.app.core.security import Caller, get_current_caller
from ideahub.app.db.base import get_db
from ideahub.app.schemas.profile import (
    AuthorNameResync,
    GitHubLinkRequest,
    ProfileResponse,
    ProfileUpdate,
)
from ideahub.app.services.github import GitHubService, get_github_service
from ideahub.app.services.profiles import ProfileDirectory

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("/me", response_model=ProfileResponse)
async def ensure_my_profile(
    response: Response,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Create the caller's profile on first sign-in; returns the existing one otherwise."""
    profile, created = await ProfileDirectory(db).ensure(caller)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ProfileResponse.model_validate(profile)


@router.post("/me/github", response_model=ProfileResponse)
async def link_github(
    link_data: GitHubLinkRequest,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
    github_service: GitHubService = Depends(get_github_service),
) -> ProfileResponse:
    """Link a GitHub account using the OAuth code from the callback."""
    profile = await ProfileDirectory(db).link_github(caller, link_data.code, github_service)
    return ProfileResponse.model_validate(profile)


@router.delete("/me/github", response_model=ProfileResponse)
async def unlink_github(
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Remove the linked GitHub account data."""
    profile = await ProfileDirectory(db).unlink_github(caller)
    return ProfileResponse.model_validate(profile)


@router.get("/{uid}", response_model=ProfileResponse)
async def get_profile(
    uid: str,
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Get a user's profile."""
    profile = await ProfileDirectory(db).get(uid)
    return ProfileResponse.model_validate(profile)


@router.put("/{uid}", response_model=ProfileResponse)
async def update_profile(
    uid: str,
    profile_data: ProfileUpdate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """
    Edit the caller's profile.

    A new display name is copied onto all of the caller's ideas.
    """
    profile = await ProfileDirectory(db).upsert(caller, uid, profile_data)
    return ProfileResponse.model_validate(profile)


@router.post("/{uid}/resync-author-name", response_model=AuthorNameResync)
async def resync_author_name(
    uid: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> AuthorNameResync:
    """Re-run the display name fan-out after a partial failure."""
    if caller.uid != uid:
        raise AuthError("You can only resync your own ideas")

    profile, ideas_updated = await ProfileDirectory(db).resync_author_name(uid)
    return AuthorNameResync(
        uid=uid,
        display_name=profile.display_name,
        ideas_updated=ideas_updated,
    )
