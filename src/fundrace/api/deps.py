"""Shared FastAPI dependencies."""

from fastapi import Request

from ..realtime import Broadcaster, NullBroadcaster

_null_broadcaster = NullBroadcaster()


def get_broadcaster(request: Request) -> Broadcaster:
    """Return the push channel attached to the running application."""

    return getattr(request.app.state, "broadcaster", None) or _null_broadcaster
