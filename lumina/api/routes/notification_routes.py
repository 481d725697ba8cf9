# lumina/api/routes/notification_routes.py

from flask import Blueprint, jsonify, request

from lumina.api.middlewares.auth_middleware import current_user_id, require_auth
from lumina.api.routes._query_args import int_arg
from lumina.api.schemas.notification_schema import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from lumina.infrastructure.database.session import db_session
from lumina.repositories.notification_repository import NotificationRepository
from lumina.services.notification_service import NotificationService

bp_notif = Blueprint("notifications", __name__)


def _build_service(session) -> NotificationService:
    return NotificationService(NotificationRepository(session))


def _pack_response(n) -> dict:
    return NotificationResponse(
        id=n.id,
        recipient_id=n.recipient_id,
        sender_id=n.sender_id,
        type=n.kind,
        message=n.text,
        related_id=n.related_id,
        read=n.read,
        created_at=n.created_at,
    ).model_dump(mode="json")


@bp_notif.get("")
@require_auth
def list_notifications():
    user_id = current_user_id()
    limit = int_arg("limit", 50, minimum=1, maximum=200)
    offset = int_arg("offset", 0, minimum=0)
    unread_only = request.args.get("unread_only", "").lower() in ("1", "true", "yes")

    with db_session() as session:
        items = _build_service(session).list_notifications(
            user_id=user_id,
            unread_only=unread_only,
            limit=limit,
            offset=offset,
        )
        body = [_pack_response(n) for n in items]

    return jsonify(body), 200


@bp_notif.get("/unread-count")
@require_auth
def unread_count():
    user_id = current_user_id()

    with db_session() as session:
        count = _build_service(session).unread_count(user_id=user_id)

    return jsonify(UnreadCountResponse(unread=count).model_dump()), 200


@bp_notif.put("/read-all")
@require_auth
def mark_all_read():
    user_id = current_user_id()

    with db_session() as session:
        updated = _build_service(session).mark_all_read(user_id=user_id)

    return jsonify(MarkAllReadResponse(updated=updated).model_dump()), 200


@bp_notif.put("/<int:notification_id>/read")
@require_auth
def mark_read(notification_id: int):
    user_id = current_user_id()

    with db_session() as session:
        n = _build_service(session).mark_read(notification_id=notification_id, user_id=user_id)
        body = _pack_response(n)

    return jsonify(body), 200
