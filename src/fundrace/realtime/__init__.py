"""Real-time push channel."""

from .broadcaster import (
    ACTIVITY_REVIEWED,
    LEADERBOARD_ROOM,
    LEADERBOARD_UPDATE,
    PHOTO_APPROVED,
    PHOTO_REJECTED,
    POINTS_AWARDED,
    Broadcaster,
    NullBroadcaster,
    SocketIOBroadcaster,
    team_room,
)
from .namespace import LeaderboardNamespace, create_socket_server

__all__ = [
    "ACTIVITY_REVIEWED",
    "LEADERBOARD_ROOM",
    "LEADERBOARD_UPDATE",
    "PHOTO_APPROVED",
    "PHOTO_REJECTED",
    "POINTS_AWARDED",
    "Broadcaster",
    "LeaderboardNamespace",
    "NullBroadcaster",
    "SocketIOBroadcaster",
    "create_socket_server",
    "team_room",
]
