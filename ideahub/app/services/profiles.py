"""
Profile Directory: user-facing profile attributes.

Ideas carry a denormalized copy of their author's display name. When the name
changes, the new value is fanned out to every idea by that author after the
profile itself is saved. The fan-out only touches ideas whose copy differs, so
re-running it (``resync_author_name``) converges without side effects.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ideahub.app.core.exceptions import (
    AuthError,
    ProfileNotFoundError,
    StoreError,
    ValidationError,
)
from ideahub.app.core.security import Caller
from ideahub.app.models.idea import Idea
from ideahub.app.models.profile import UserProfile
from ideahub.app.schemas.profile import ProfileUpdate
from ideahub.app.services.base import StoreService
from ideahub.app.services.github import GitHubService

logger = logging.getLogger(__name__)

LINK_FIELDS = ("github", "linkedin", "twitter", "website")

GITHUB_FIELDS = (
    "github_username",
    "github_name",
    "github_bio",
    "github_avatar",
    "github_url",
    "github_public_repos",
    "github_followers",
    "github_repos",
    "github_linked_at",
)


class ProfileDirectory(StoreService):
    """Owns user profiles and keeps idea author names in sync."""

    async def find(self, uid: str) -> UserProfile | None:
        result = await self._execute(
            select(UserProfile).where(UserProfile.uid == uid),
            "get profile",
        )
        return result.scalar_one_or_none()

    async def get(self, uid: str) -> UserProfile:
        """Get a profile or raise ProfileNotFoundError."""
        profile = await self.find(uid)
        if not profile:
            raise ProfileNotFoundError(uid)
        return profile

    async def ensure(self, caller: Caller) -> tuple[UserProfile, bool]:
        """
        Create the caller's profile at first sign-in.

        Returns:
            Tuple of (profile, created)
        """
        profile = await self.find(caller.uid)
        if profile:
            return profile, False

        if not caller.email:
            raise ValidationError("Identity token has no email claim", field="email")

        now = datetime.utcnow()
        profile = UserProfile(
            uid=caller.uid,
            email=caller.email,
            display_name=caller.name or "",
            created_at=now,
            updated_at=now,
        )
        self.db.add(profile)
        try:
            await self.db.commit()
        except IntegrityError:
            # Created by a concurrent sign-in
            await self.db.rollback()
            return await self.get(caller.uid), False
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("create profile", e)

        logger.info(f"[PROFILE-CREATE] Profile created for {caller.uid}")
        return profile, True

    async def upsert(self, caller: Caller, uid: str, profile_data: ProfileUpdate) -> UserProfile:
        """
        Edit the caller's own profile, creating it first if needed.

        A display name change is fanned out to the author's ideas. A failed
        fan-out is logged and leaves the profile change in place.
        """
        if caller.uid != uid:
            raise AuthError("You can only edit your own profile")

        profile, _ = await self.ensure(caller)
        fields = profile_data.model_dump(exclude_unset=True)

        name_changed = False
        if "display_name" in fields:
            display_name = (fields["display_name"] or "").strip()
            if not display_name:
                raise ValidationError("Display name cannot be empty", field="display_name")
            name_changed = display_name != profile.display_name
            profile.display_name = display_name

        for field in LINK_FIELDS:
            if field in fields:
                value = (fields[field] or "").strip()
                setattr(profile, field, value or None)

        profile.updated_at = datetime.utcnow()
        await self._commit("update profile")
        logger.info(f"[PROFILE-UPDATE] Profile {uid} updated fields: {sorted(fields)}")

        if name_changed:
            try:
                await self.propagate_author_name(uid, profile.display_name)
            except StoreError as e:
                logger.error(f"[PROFILE-UPDATE] Author name fan-out failed for {uid}: {e.message}")
                await self.db.refresh(profile)

        return profile

    async def propagate_author_name(self, uid: str, display_name: str) -> int:
        """
        Write display_name onto every idea authored by uid.

        Returns:
            Number of ideas whose author name changed
        """
        result = await self._execute(
            update(Idea)
            .where(Idea.author_id == uid, Idea.author_name != display_name)
            .values(author_name=display_name),
            "propagate author name",
        )
        await self._commit("propagate author name")

        logger.info(f"[PROFILE-FANOUT] Updated author name on {result.rowcount} ideas for {uid}")
        return result.rowcount

    async def resync_author_name(self, uid: str) -> tuple[UserProfile, int]:
        """Re-run the author name fan-out from the stored profile."""
        profile = await self.get(uid)
        if not profile.display_name:
            return profile, 0
        return profile, await self.propagate_author_name(uid, profile.display_name)

    async def link_github(
        self,
        caller: Caller,
        code: str,
        github_service: GitHubService,
    ) -> UserProfile:
        """
        Link a GitHub account to the caller's profile.

        The plain ``github`` link is filled from the account URL when empty.
        """
        profile, _ = await self.ensure(caller)
        account = await github_service.fetch_account(code)

        for field, value in account.items():
            setattr(profile, field, value)
        if not profile.github and account.get("github_url"):
            profile.github = account["github_url"]
        profile.github_linked_at = datetime.utcnow()
        profile.updated_at = datetime.utcnow()
        await self._commit("link github")

        logger.info(f"[GITHUB-LINK] Linked {account['github_username']} to {caller.uid}")
        return profile

    async def unlink_github(self, caller: Caller) -> UserProfile:
        """Clear the linked GitHub account data. The plain github link is kept."""
        profile = await self.get(caller.uid)

        for field in GITHUB_FIELDS:
            setattr(profile, field, None)
        profile.updated_at = datetime.utcnow()
        await self._commit("unlink github")

        logger.info(f"[GITHUB-UNLINK] Unlinked GitHub from {caller.uid}")
        return profile
