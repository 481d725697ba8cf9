# lumina/main.py
from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS

from lumina.api.middlewares.error_handler import register_error_handlers
from lumina.api.realtime.socket_handlers import register_socket_handlers
from lumina.api.routes import register_routes
from lumina.config.flask_config import configure_app
from lumina.config.logging_config import configure_logging
from lumina.config.settings import settings
from lumina.infrastructure.database.session import create_all
from lumina.infrastructure.realtime.room_registry import RoomRegistry
from lumina.infrastructure.realtime.socketio_server import emit_to_sid, socketio

import lumina.infrastructure.database.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    configure_logging(settings.log_level)

    app = Flask(__name__)

    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)

    if settings.auto_create_tables:
        create_all()

    register_routes(app, api_prefix=settings.api_prefix)
    register_error_handlers(app)

    # one registry per app; handlers and notifiers get it injected
    registry = RoomRegistry(emit_to_sid)
    app.extensions["room_registry"] = registry

    socketio.init_app(app, path=settings.socketio_path)
    register_socket_handlers(socketio, registry)

    logger.info("lumina api ready (prefix=%s, socket path=%s)", settings.api_prefix, settings.socketio_path)
    return app
