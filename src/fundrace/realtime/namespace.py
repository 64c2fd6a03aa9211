"""Socket.IO namespace that manages leaderboard and team subscriptions."""

from __future__ import annotations

import logging

import socketio

from .broadcaster import LEADERBOARD_ROOM, team_room

logger = logging.getLogger(__name__)


class LeaderboardNamespace(socketio.AsyncNamespace):
    """Every client joins the leaderboard room on connect and may follow one or more teams."""

    def __init__(self, namespace: str = "/") -> None:
        super().__init__(namespace)

    async def trigger_event(self, event, *args):
        # clients emit hyphenated names ("join-team"); handlers use underscores
        return await super().trigger_event(event.replace("-", "_"), *args)

    async def on_connect(self, sid, environ, auth=None):
        await self.enter_room(sid, LEADERBOARD_ROOM)
        logger.debug("socket %s connected", sid)

    async def on_disconnect(self, sid, *args):
        logger.debug("socket %s disconnected", sid)

    async def on_join_leaderboard(self, sid, *args):
        await self.enter_room(sid, LEADERBOARD_ROOM)

    async def on_join_team(self, sid, team_id=None):
        if team_id:
            await self.enter_room(sid, team_room(team_id))

    async def on_leave_team(self, sid, team_id=None):
        if team_id:
            await self.leave_room(sid, team_room(team_id))


def create_socket_server(cors_origins: list[str]) -> socketio.AsyncServer:
    """Build the ASGI Socket.IO server with the leaderboard namespace registered."""

    server = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins=cors_origins)
    server.register_namespace(LeaderboardNamespace())
    return server
