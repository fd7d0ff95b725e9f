"""Like and comment API endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideahub.app.core.security import Caller, get_current_caller, get_optional_caller
from ideahub.app.db.base import get_db
from ideahub.app.schemas.engagement import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    LikeStatus,
)
from ideahub.app.services.engagement import EngagementTracker
from ideahub.app.services.profiles import ProfileDirectory
from ideahub.app.websocket.manager import manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ideas/{idea_id}", tags=["engagement"])


async def _publish_snapshot(tracker: EngagementTracker, idea_id: str) -> None:
    # Nothing to compute when nobody is subscribed
    if manager.subscriber_count(idea_id) == 0:
        return
    await manager.send_snapshot(await tracker.snapshot(idea_id))


@router.get("/likes", response_model=LikeStatus)
async def get_like_status(
    idea_id: str,
    caller: Caller | None = Depends(get_optional_caller),
    db: AsyncSession = Depends(get_db),
) -> LikeStatus:
    """Live like count, plus whether the caller likes the idea when authenticated."""
    tracker = EngagementTracker(db)
    liked = await tracker.has_liked(idea_id, caller.uid) if caller else False
    return LikeStatus(idea_id=idea_id, liked=liked, like_count=await tracker.count(idea_id))


@router.put("/likes", response_model=LikeStatus)
async def like_idea(
    idea_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> LikeStatus:
    """
    Like an idea.

    If the user has already liked it, this endpoint returns success (idempotent).
    """
    tracker = EngagementTracker(db)
    if await tracker.like(idea_id, caller.uid):
        await _publish_snapshot(tracker, idea_id)
    return LikeStatus(idea_id=idea_id, liked=True, like_count=await tracker.count(idea_id))


@router.delete("/likes", response_model=LikeStatus)
async def unlike_idea(
    idea_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> LikeStatus:
    """
    Remove a like from an idea.

    If the user has not liked it, this endpoint returns success (idempotent).
    """
    tracker = EngagementTracker(db)
    if await tracker.unlike(idea_id, caller.uid):
        await _publish_snapshot(tracker, idea_id)
    return LikeStatus(idea_id=idea_id, liked=False, like_count=await tracker.count(idea_id))


@router.post("/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    idea_id: str,
    comment_data: CommentCreate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    """Add a comment signed with the caller's profile name."""
    profile = await ProfileDirectory(db).find(caller.uid)
    author_name = (
        (profile.display_name if profile else None)
        or caller.name
        or caller.email
        or "Anonymous"
    )

    tracker = EngagementTracker(db)
    comment = await tracker.add_comment(idea_id, caller.uid, author_name, comment_data.text)
    await _publish_snapshot(tracker, idea_id)
    return CommentResponse.model_validate(comment)


@router.get("/comments", response_model=CommentListResponse)
async def list_comments(
    idea_id: str,
    db: AsyncSession = Depends(get_db),
) -> CommentListResponse:
    """List an idea's comments, oldest first."""
    comments = await EngagementTracker(db).list_comments(idea_id)
    comment_responses = [CommentResponse.model_validate(comment) for comment in comments]
    return CommentListResponse(comments=comment_responses, total=len(comment_responses))


@router.delete("/comments/{comment_id}", status_code=status.HTTP_200_OK)
async def delete_comment(
    idea_id: str,
    comment_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a comment. Only its author may delete it."""
    tracker = EngagementTracker(db)
    await tracker.delete_comment(caller, idea_id, comment_id)
    await _publish_snapshot(tracker, idea_id)
    return {"message": "Comment deleted successfully", "comment_id": comment_id}
