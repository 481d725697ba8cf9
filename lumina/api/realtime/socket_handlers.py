# lumina/api/realtime/socket_handlers.py
from __future__ import annotations

import logging
from typing import Any

from flask import request
from flask_socketio import ConnectionRefusedError, SocketIO, emit

from lumina.core.exceptions import UnauthorizedError
from lumina.infrastructure.realtime.room_registry import RoomRegistry
from lumina.infrastructure.security.jwt_provider import JwtProvider

logger = logging.getLogger(__name__)


def _get_token(auth: Any) -> str | None:
    # 1) socket.io auth payload: {"token": "..."}
    if isinstance(auth, dict) and auth.get("token"):
        return str(auth["token"]).strip()

    # 2) Authorization: Bearer <token>
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip()

    # 3) querystring ?token=...
    token = request.args.get("token")
    if token:
        return str(token).strip()

    return None


def _parse_user_id(value: Any) -> int | None:
    if isinstance(value, dict):
        value = value.get("userId", value.get("user_id"))
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _auth_user_id() -> int | None:
    return request.environ.get("auth_user_id")


def register_socket_handlers(socketio: SocketIO, registry: RoomRegistry) -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        token = _get_token(auth)
        if not token:
            logger.warning("socket connection without token refused")
            raise ConnectionRefusedError("unauthorized")

        try:
            user_id = JwtProvider().user_id_from(token)
        except UnauthorizedError as e:
            logger.warning("socket connection refused: %s", e)
            raise ConnectionRefusedError("unauthorized") from e

        request.environ["auth_user_id"] = user_id

    @socketio.on("join_room")
    def on_join(data):
        user_id = _auth_user_id()
        requested = _parse_user_id(data)

        if requested is None or requested != user_id:
            logger.warning("socket %s (user %s) tried to join room %r", request.sid, user_id, data)
            emit("room_error", {"error": "You can only join your own room."})
            return

        registry.join(request.sid, user_id)
        emit("room_joined", {"user_id": user_id})

    @socketio.on("send_message")
    def on_send_message(data):
        user_id = _auth_user_id()
        if not isinstance(data, dict):
            emit("room_error", {"error": "Invalid payload."})
            return {"delivered": 0}

        receiver_id = _parse_user_id(data.get("receiverId"))
        if receiver_id is None:
            emit("room_error", {"error": "receiverId is required."})
            return {"delivered": 0}

        payload = dict(data)
        payload["sender"] = user_id

        delivered = registry.publish(receiver_id, "receive_message", payload)
        logger.info("relayed message from %s to %s (%d connection(s))", user_id, receiver_id, delivered)
        return {"delivered": delivered}

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        registry.leave(request.sid)
