"""Idea management API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideahub.app.core.security import Caller, get_current_caller
from ideahub.app.db.base import get_db
from ideahub.app.models.idea import Idea, IdeaCategory
from ideahub.app.schemas.idea import (
    IdeaCreate,
    IdeaFilters,
    IdeaListResponse,
    IdeaResponse,
    IdeaUpdate,
    SortOption,
)
from ideahub.app.services.ideas import IdeaStore
from ideahub.app.websocket.manager import manager

router = APIRouter(prefix="/ideas", tags=["ideas"])

# Logger
logger = logging.getLogger(__name__)


def _to_list_response(ideas: list[Idea]) -> IdeaListResponse:
    idea_responses = [IdeaResponse.model_validate(idea) for idea in ideas]
    return IdeaListResponse(ideas=idea_responses, total=len(idea_responses))


@router.post("/", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(
    idea_data: IdeaCreate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> IdeaResponse:
    """
    Create a new idea.

    The caller must have a verified email and be the idea's author.
    """
    idea = await IdeaStore(db).create(caller, idea_data)
    return IdeaResponse.model_validate(idea)


@router.get("/", response_model=IdeaListResponse)
async def list_ideas(
    category: IdeaCategory | None = None,
    search: str | None = None,
    sort_by: SortOption = SortOption.NEWEST,
    db: AsyncSession = Depends(get_db),
) -> IdeaListResponse:
    """List the idea feed with optional category filter, search and sort order."""
    filters = IdeaFilters(category=category, search=search, sort_by=sort_by)
    ideas = await IdeaStore(db).list_ideas(filters)
    return _to_list_response(ideas)


@router.get("/recent", response_model=IdeaListResponse)
async def list_recent_ideas(
    limit: int | None = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
) -> IdeaListResponse:
    """List the newest ideas."""
    ideas = await IdeaStore(db).list_recent(limit)
    return _to_list_response(ideas)


@router.get("/by-author/{author_id}", response_model=IdeaListResponse)
async def list_ideas_by_author(
    author_id: str,
    category: IdeaCategory | None = None,
    search: str | None = None,
    sort_by: SortOption = SortOption.NEWEST,
    db: AsyncSession = Depends(get_db),
) -> IdeaListResponse:
    """List one author's ideas."""
    filters = IdeaFilters(category=category, search=search, sort_by=sort_by)
    ideas = await IdeaStore(db).list_by_author(author_id, filters)
    return _to_list_response(ideas)


@router.get("/{idea_id}", response_model=IdeaResponse)
async def get_idea(
    idea_id: str,
    db: AsyncSession = Depends(get_db),
) -> IdeaResponse:
    """Get a specific idea."""
    idea = await IdeaStore(db).get(idea_id)
    return IdeaResponse.model_validate(idea)


@router.patch("/{idea_id}", response_model=IdeaResponse)
async def update_idea(
    idea_id: str,
    update_data: IdeaUpdate,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> IdeaResponse:
    """Update an idea. Only its author may edit it."""
    idea = await IdeaStore(db).update(caller, idea_id, update_data)
    return IdeaResponse.model_validate(idea)


@router.delete("/{idea_id}", status_code=status.HTTP_200_OK)
async def delete_idea(
    idea_id: str,
    caller: Caller = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """
    Delete an idea.

    Users can delete their own ideas. Likes and comments under it are not removed.
    """
    logger.info(f"[DELETE-IDEA] Request to delete idea {idea_id} by user {caller.uid}")

    await IdeaStore(db).delete(caller, idea_id)

    # Notify subscribers of the idea via WebSocket
    await manager.send_idea_deleted(idea_id)

    return {"message": "Idea deleted successfully", "idea_id": idea_id}
