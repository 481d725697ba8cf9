# lumina/infrastructure/realtime/socketio_server.py
from __future__ import annotations

from typing import Any

from flask_socketio import SocketIO

from lumina.config.settings import settings

socketio = SocketIO(
    cors_allowed_origins=settings.cors_origins,
    async_mode=settings.socketio_async_mode,
)


def emit_to_sid(event: str, payload: Any, sid: str) -> None:
    socketio.emit(event, payload, to=sid)


def current_registry():
    """Room registry owned by the running app (set up in ``create_app``)."""
    from flask import current_app

    return current_app.extensions["room_registry"]
