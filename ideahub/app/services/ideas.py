"""
Idea Store: create, update, delete and feed queries for ideas.

Category and sort order are applied in the query. The free-text search spans
title, description and tags, so it runs over the fetched page in memory; the
page is capped at ``settings.feed_page_size`` before searching.
"""

import logging
from datetime import datetime

from sqlalchemy import select

from ideahub.app.core.config import settings
from ideahub.app.core.exceptions import AuthError, IdeaNotFoundError, ValidationError
from ideahub.app.core.security import Caller
from ideahub.app.models.idea import Idea, CollaborationStatus
from ideahub.app.schemas.idea import IdeaCreate, IdeaUpdate, IdeaFilters, SortOption
from ideahub.app.services.base import StoreService

logger = logging.getLogger(__name__)

# Single-field ordering per sort option. Ties keep whatever order the store returns.
_SORT_ORDER = {
    SortOption.NEWEST: Idea.created_at.desc(),
    SortOption.OLDEST: Idea.created_at.asc(),
    SortOption.ALPHABETICAL: Idea.title.asc(),
    SortOption.MOST_LIKED: Idea.likes.desc(),
}


def clean_tags(tags: list[str]) -> list[str]:
    """Strip tags and drop empty ones, keeping order."""
    if not isinstance(tags, list):
        raise ValidationError("Tags must be a list", field="tags")
    return [tag.strip() for tag in tags if isinstance(tag, str) and tag.strip()]


def matches_search(idea: Idea, search: str) -> bool:
    """Case-insensitive substring match on title, description or any tag."""
    needle = search.lower()
    return (
        needle in idea.title.lower()
        or needle in idea.description.lower()
        or any(needle in tag.lower() for tag in (idea.tags or []))
    )


def _require_text(value: str | None, field: str, max_length: int | None = None) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Missing or invalid field: {field}", field=field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return value.strip()


class IdeaStore(StoreService):
    """Owns idea records."""

    async def create(self, caller: Caller, idea_data: IdeaCreate) -> Idea:
        """
        Create a new idea for the calling author.

        Args:
            caller: Authenticated caller; must be email-verified and match author_id
            idea_data: Validated idea payload

        Returns:
            The stored Idea with id, timestamps and zeroed counters

        Raises:
            AuthError: If the caller is unverified or not the author
            ValidationError: If a required field is blank or tags is not a list
        """
        if not caller.email_verified:
            raise AuthError("Email must be verified to create ideas")
        if idea_data.author_id != caller.uid:
            raise AuthError("Author ID mismatch")

        title = _require_text(idea_data.title, "title", settings.max_title_length)
        description = _require_text(
            idea_data.description, "description", settings.max_description_length
        )
        if not idea_data.category:
            raise ValidationError("Missing or invalid field: category", field="category")
        author_name = _require_text(idea_data.author_name, "author_name")
        author_email = _require_text(idea_data.author_email, "author_email")
        tags = clean_tags(idea_data.tags)

        now = datetime.utcnow()
        idea = Idea(
            title=title,
            description=description,
            category=idea_data.category.value,
            author_id=idea_data.author_id,
            author_name=author_name,
            author_email=author_email,
            tags=tags,
            likes=0,
            comments=0,
            collaboration_status=idea_data.collaboration_status.value,
            collaborators=[],
            created_at=now,
            updated_at=now,
        )
        self.db.add(idea)
        await self._commit("create idea")

        logger.info(f"[IDEA-CREATE] Idea {idea.id} created by {idea.author_id}")
        return idea

    async def get(self, idea_id: str, for_update: bool = False) -> Idea:
        """
        Get an idea by ID or raise IdeaNotFoundError.

        With ``for_update`` the row is locked until the transaction ends and
        reloaded even if the session already holds it.
        """
        statement = select(Idea).where(Idea.id == idea_id)
        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)

        result = await self._execute(statement, "get idea")
        idea = result.scalar_one_or_none()
        if not idea:
            raise IdeaNotFoundError(idea_id)
        return idea

    async def update(self, caller: Caller, idea_id: str, update_data: IdeaUpdate) -> Idea:
        """
        Apply a partial update and stamp a new updated_at.

        Only the author may edit. Identity fields are rejected by the schema.
        """
        idea = await self.get(idea_id)
        if idea.author_id != caller.uid:
            raise AuthError("You can only edit your own ideas")

        fields = update_data.model_dump(exclude_unset=True)
        for field, value in fields.items():
            if value is None:
                raise ValidationError(f"{field} cannot be null", field=field)

        if "title" in fields:
            idea.title = _require_text(fields["title"], "title", settings.max_title_length)
        if "description" in fields:
            idea.description = _require_text(
                fields["description"], "description", settings.max_description_length
            )
        if "category" in fields:
            idea.category = update_data.category.value
        if "tags" in fields:
            idea.tags = clean_tags(fields["tags"])
        if "collaboration_status" in fields:
            idea.collaboration_status = CollaborationStatus(update_data.collaboration_status).value

        idea.updated_at = datetime.utcnow()
        await self._commit("update idea")

        logger.info(f"[IDEA-UPDATE] Idea {idea_id} updated fields: {sorted(fields)}")
        return idea

    async def delete(self, caller: Caller, idea_id: str) -> None:
        """
        Delete an idea owned by the caller.

        Likes, comments and collaboration requests under the idea are left in place.
        """
        idea = await self.get(idea_id)
        if idea.author_id != caller.uid:
            raise AuthError("You can only delete your own ideas")

        await self.db.delete(idea)
        await self._commit("delete idea")

        logger.info(f"[IDEA-DELETE] Idea {idea_id} deleted by {caller.uid}")

    async def list_ideas(self, filters: IdeaFilters, author_id: str | None = None) -> list[Idea]:
        """
        Fetch the feed.

        Category and sort are applied in the query, then the page is capped,
        then the search filter runs in memory.
        """
        statement = select(Idea)
        if author_id is not None:
            statement = statement.where(Idea.author_id == author_id)
        if filters.category:
            statement = statement.where(Idea.category == filters.category.value)
        statement = statement.order_by(_SORT_ORDER[filters.sort_by]).limit(settings.feed_page_size)

        result = await self._execute(statement, "list ideas")
        ideas = list(result.scalars().all())

        if filters.search and filters.search.strip():
            search = filters.search.strip()
            ideas = [idea for idea in ideas if matches_search(idea, search)]

        return ideas

    async def list_by_author(self, author_id: str, filters: IdeaFilters) -> list[Idea]:
        """Same as list_ideas, restricted to one author."""
        return await self.list_ideas(filters, author_id=author_id)

    async def list_recent(self, limit: int | None = None) -> list[Idea]:
        """Newest ideas first."""
        result = await self._execute(
            select(Idea)
            .order_by(Idea.created_at.desc())
            .limit(limit or settings.recent_ideas_limit),
            "list recent ideas",
        )
        return list(result.scalars().all())
