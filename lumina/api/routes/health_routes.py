# lumina/api/routes/health_routes.py
import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from lumina.core.exceptions import ServiceUnavailableError
from lumina.infrastructure.database.session import db_session, engine
from lumina.infrastructure.realtime.socketio_server import current_registry

logger = logging.getLogger(__name__)

bp_health = Blueprint("health", __name__)


@bp_health.get("")
def health():
    registry = current_registry()
    return jsonify({"status": "ok", "online_users": registry.online_count()}), 200


@bp_health.get("/db")
def health_db():
    try:
        with db_session() as session:
            session.execute(text("select 1"))
    except SQLAlchemyError as e:
        logger.error("database check failed: %s", e)
        raise ServiceUnavailableError("Database unavailable.") from e

    return jsonify({"db": "ok", "dialect": engine.dialect.name}), 200
