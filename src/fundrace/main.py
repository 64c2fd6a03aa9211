"""FastAPI application entrypoint for Fundrace."""

import logging

import socketio
from fastapi import FastAPI

from .api.v1.router import api_router
from .core.config import get_settings
from .jobs import register_scheduler
from .realtime import SocketIOBroadcaster, create_socket_server


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Fundrace API", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")

    sio = create_socket_server(settings.cors_origin_list)
    app.state.sio = sio
    app.state.broadcaster = SocketIOBroadcaster(sio)

    register_scheduler(app)
    return app


app = create_app()
# Serve with ``uvicorn fundrace.main:asgi_app`` so Socket.IO shares the port.
asgi_app = socketio.ASGIApp(app.state.sio, other_asgi_app=app)
