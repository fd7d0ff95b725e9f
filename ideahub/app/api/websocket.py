"""WebSocket endpoints for live engagement snapshots."""

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ideahub.app.core.exceptions import StoreError
from ideahub.app.db.base import get_session_factory
from ideahub.app.services.engagement import EngagementTracker
from ideahub.app.websocket.manager import manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/ideas/{idea_id}")
async def idea_engagement_websocket(
    websocket: WebSocket,
    idea_id: str,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """
    Snapshot subscription for an idea's likes and comments.

    Events sent to clients:
    - engagement_snapshot: full like set and counts, on connect and after every change
    - idea_deleted: the idea was removed
    - pong: reply to a "ping" heartbeat
    """
    await manager.connect(websocket, idea_id)

    try:
        # The session is closed before the socket starts idling
        async with session_factory() as session:
            snapshot = await EngagementTracker(session).snapshot(idea_id)
        await manager.send_personal_message(manager.snapshot_message(snapshot), websocket)

        while True:
            # Keep connection alive and listen for heartbeats
            data = await websocket.receive_text()

            if data == "ping":
                await manager.send_personal_message({"type": "pong"}, websocket)

    except WebSocketDisconnect:
        pass
    except StoreError as e:
        logger.error(f"[WS] Initial snapshot failed for idea {idea_id}: {e.message}")
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
    finally:
        manager.disconnect(websocket, idea_id)
