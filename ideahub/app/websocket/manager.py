"""WebSocket connection manager for live engagement snapshots."""

import json
import logging
from typing import Any

from fastapi import WebSocket

from ideahub.app.schemas.engagement import EngagementSnapshot

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket subscriptions, one room per idea."""

    def __init__(self):
        """Initialize connection manager."""
        # Maps idea_id -> list of WebSocket connections
        self.active_connections: dict[str, list[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, idea_id: str) -> None:
        """Accept a new WebSocket connection and add it to the idea's room."""
        await websocket.accept()

        if idea_id not in self.active_connections:
            self.active_connections[idea_id] = []

        self.active_connections[idea_id].append(websocket)

    def disconnect(self, websocket: WebSocket, idea_id: str) -> None:
        """Remove a WebSocket connection from the idea's room."""
        if idea_id in self.active_connections:
            if websocket in self.active_connections[idea_id]:
                self.active_connections[idea_id].remove(websocket)

            # Clean up empty rooms
            if not self.active_connections[idea_id]:
                del self.active_connections[idea_id]

    def subscriber_count(self, idea_id: str) -> int:
        """Number of live subscribers for an idea."""
        return len(self.active_connections.get(idea_id, []))

    async def send_personal_message(self, message: dict[str, Any], websocket: WebSocket) -> None:
        """Send a message to a specific WebSocket connection."""
        await websocket.send_text(json.dumps(message))

    async def broadcast_to_idea(self, idea_id: str, message: dict[str, Any]) -> None:
        """Broadcast a message to every subscriber of an idea."""
        if idea_id not in self.active_connections:
            return

        disconnected = []
        for connection in list(self.active_connections[idea_id]):
            try:
                await connection.send_text(json.dumps(message))
            except Exception as e:
                # Mark for removal if connection is broken
                logger.debug(f"[WS] Dropping broken connection for idea {idea_id}: {e}")
                disconnected.append(connection)

        for connection in disconnected:
            self.disconnect(connection, idea_id)

    @staticmethod
    def snapshot_message(snapshot: EngagementSnapshot) -> dict[str, Any]:
        return {
            "type": "engagement_snapshot",
            "data": snapshot.model_dump(),
        }

    async def send_snapshot(self, snapshot: EngagementSnapshot) -> None:
        """Push the full engagement state of an idea to its subscribers."""
        await self.broadcast_to_idea(snapshot.idea_id, self.snapshot_message(snapshot))

    async def send_idea_deleted(self, idea_id: str) -> None:
        """Tell subscribers the idea is gone."""
        await self.broadcast_to_idea(
            idea_id,
            {"type": "idea_deleted", "data": {"idea_id": idea_id}},
        )


# Global connection manager instance
manager = ConnectionManager()
