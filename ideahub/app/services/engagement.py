"""
Engagement Tracker: likes and comments under an idea.

The like set is the source of truth for like counts. The ``likes`` and
``comments`` counters on the idea are recomputed from their sets in the same
transaction as every membership change, so the feed can sort on them.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ideahub.app.core.config import settings
from ideahub.app.core.exceptions import (
    AuthError,
    CommentNotFoundError,
    StoreError,
    ValidationError,
)
from ideahub.app.core.security import Caller
from ideahub.app.models.comment import Comment
from ideahub.app.models.idea import Idea
from ideahub.app.models.like import Like
from ideahub.app.schemas.engagement import EngagementSnapshot
from ideahub.app.services.base import StoreService
from ideahub.app.services.ideas import IdeaStore

logger = logging.getLogger(__name__)


class EngagementTracker(StoreService):
    """Owns per-idea like membership and comment threads."""

    async def _find_idea(self, idea_id: str) -> Idea | None:
        result = await self._execute(select(Idea).where(Idea.id == idea_id), "get idea")
        return result.scalar_one_or_none()

    async def _find_like(self, idea_id: str, user_id: str) -> Like | None:
        result = await self._execute(
            select(Like).where(Like.idea_id == idea_id, Like.user_id == user_id),
            "get like",
        )
        return result.scalar_one_or_none()

    async def like(self, idea_id: str, user_id: str) -> bool:
        """
        Add user_id to the idea's like set.

        Idempotent: liking twice leaves a single membership.

        Returns:
            True if the like was added, False if it already existed

        Raises:
            IdeaNotFoundError: If the idea does not exist
        """
        idea = await IdeaStore(self.db).get(idea_id)

        if await self._find_like(idea_id, user_id):
            return False

        self.db.add(Like(idea_id=idea_id, user_id=user_id, liked_at=datetime.utcnow()))
        try:
            await self.db.flush()
        except IntegrityError:
            # A concurrent like from the same user won the unique index
            await self.db.rollback()
            return False
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("like idea", e)

        idea.likes = await self.count(idea_id)
        await self._commit("like idea")

        logger.info(f"[LIKE] User {user_id} liked idea {idea_id}")
        return True

    async def unlike(self, idea_id: str, user_id: str) -> bool:
        """
        Remove user_id from the idea's like set.

        Unliking a non-member (or an idea that no longer exists) is a no-op.

        Returns:
            True if a like was removed
        """
        result = await self._execute(
            delete(Like).where(Like.idea_id == idea_id, Like.user_id == user_id),
            "unlike idea",
        )
        if result.rowcount == 0:
            return False

        idea = await self._find_idea(idea_id)
        if idea:
            idea.likes = await self.count(idea_id)
        await self._commit("unlike idea")

        logger.info(f"[UNLIKE] User {user_id} removed like from idea {idea_id}")
        return True

    async def has_liked(self, idea_id: str, user_id: str) -> bool:
        """Whether user_id is in the idea's like set."""
        return await self._find_like(idea_id, user_id) is not None

    async def count(self, idea_id: str) -> int:
        """Cardinality of the idea's like set."""
        result = await self._execute(
            select(func.count()).select_from(Like).where(Like.idea_id == idea_id),
            "count likes",
        )
        return result.scalar_one()

    async def likers(self, idea_id: str) -> list[str]:
        """User IDs in the idea's like set, oldest like first. Empty for a missing idea."""
        result = await self._execute(
            select(Like.user_id).where(Like.idea_id == idea_id).order_by(Like.liked_at),
            "list likes",
        )
        return list(result.scalars().all())

    async def _count_comments(self, idea_id: str) -> int:
        result = await self._execute(
            select(func.count()).select_from(Comment).where(Comment.idea_id == idea_id),
            "count comments",
        )
        return result.scalar_one()

    async def add_comment(
        self,
        idea_id: str,
        author_id: str,
        author_name: str,
        text: str,
    ) -> Comment:
        """
        Append a comment to the idea's thread.

        Raises:
            IdeaNotFoundError: If the idea does not exist
            ValidationError: If the text is blank or too long
        """
        if not text or not text.strip():
            raise ValidationError("Comment text is required", field="text")
        if len(text) > settings.max_comment_length:
            raise ValidationError(
                f"Comment must be at most {settings.max_comment_length} characters",
                field="text",
            )

        idea = await IdeaStore(self.db).get(idea_id)

        comment = Comment(
            idea_id=idea_id,
            author_id=author_id,
            author_name=author_name,
            text=text.strip(),
            created_at=datetime.utcnow(),
        )
        self.db.add(comment)
        idea.comments = await self._count_comments(idea_id)
        await self._commit("add comment")

        logger.info(f"[COMMENT-ADD] Comment {comment.id} added to idea {idea_id} by {author_id}")
        return comment

    async def list_comments(self, idea_id: str) -> list[Comment]:
        """Full comment thread, oldest first."""
        await IdeaStore(self.db).get(idea_id)

        result = await self._execute(
            select(Comment)
            .where(Comment.idea_id == idea_id)
            .order_by(Comment.created_at.asc()),
            "list comments",
        )
        return list(result.scalars().all())

    async def delete_comment(self, caller: Caller, idea_id: str, comment_id: str) -> None:
        """
        Hard-delete a comment written by the caller.

        Raises:
            IdeaNotFoundError: If the idea does not exist
            CommentNotFoundError: If the comment is not under this idea
            AuthError: If the caller did not write the comment
        """
        idea = await IdeaStore(self.db).get(idea_id)

        result = await self._execute(
            select(Comment).where(Comment.id == comment_id, Comment.idea_id == idea_id),
            "get comment",
        )
        comment = result.scalar_one_or_none()
        if not comment:
            raise CommentNotFoundError(comment_id, idea_id)
        if comment.author_id != caller.uid:
            raise AuthError("You can only delete your own comments")

        await self.db.delete(comment)
        idea.comments = await self._count_comments(idea_id)
        await self._commit("delete comment")

        logger.info(f"[COMMENT-DELETE] Comment {comment_id} deleted from idea {idea_id}")

    async def snapshot(self, idea_id: str) -> EngagementSnapshot:
        """Full engagement state for subscribers. A missing idea reports empty membership."""
        liked_by = await self.likers(idea_id)
        return EngagementSnapshot(
            idea_id=idea_id,
            like_count=len(liked_by),
            liked_by=liked_by,
            comment_count=await self._count_comments(idea_id),
        )
