"""Publish/subscribe delivery of leaderboard and team events."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from uuid import UUID

import socketio

logger = logging.getLogger(__name__)

LEADERBOARD_ROOM = "leaderboard"
LEADERBOARD_UPDATE = "leaderboard-update"
PHOTO_APPROVED = "photo-approved"
PHOTO_REJECTED = "photo-rejected"
POINTS_AWARDED = "points-awarded"
ACTIVITY_REVIEWED = "activity-reviewed"


def team_room(team_id: UUID | str) -> str:
    return f"team-{team_id}"


class Broadcaster(Protocol):
    """Push channel handed to mutation handlers."""

    async def broadcast(self, event: str, payload: Any) -> None:
        """Deliver ``payload`` to every subscriber of the leaderboard room."""

    async def broadcast_to_team(self, team_id: UUID | str, event: str, payload: Any) -> None:
        """Deliver ``payload`` to subscribers of one team's room."""


class SocketIOBroadcaster:
    """Broadcaster backed by a python-socketio server."""

    def __init__(self, server: socketio.AsyncServer, namespace: str = "/") -> None:
        self._server = server
        self._namespace = namespace

    async def broadcast(self, event: str, payload: Any) -> None:
        await self._server.emit(event, payload, room=LEADERBOARD_ROOM, namespace=self._namespace)

    async def broadcast_to_team(self, team_id: UUID | str, event: str, payload: Any) -> None:
        if not team_id:
            return
        await self._server.emit(event, payload, room=team_room(team_id), namespace=self._namespace)


class NullBroadcaster:
    """Broadcaster for processes that have no socket server, such as scripts."""

    async def broadcast(self, event: str, payload: Any) -> None:
        logger.debug("dropping %s broadcast: no socket server", event)

    async def broadcast_to_team(self, team_id: UUID | str, event: str, payload: Any) -> None:
        logger.debug("dropping %s broadcast for team %s: no socket server", event, team_id)
