# lumina/api/routes/message_routes.py

from dataclasses import asdict

from flask import Blueprint, jsonify, request

from lumina.api.middlewares.auth_middleware import current_user_id, require_auth
from lumina.api.routes._query_args import optional_int_arg
from lumina.api.schemas.message_schema import (
    ConversationListItemResponse,
    MessageResponse,
    ProductSummaryResponse,
    SendMessageRequest,
)
from lumina.core.interfaces.notification_notifier import NotificationNotifier, PendingNotifications
from lumina.infrastructure.database.session import db_session
from lumina.infrastructure.realtime.socketio_notification_notifier import (
    SocketIONotificationNotifier,
)
from lumina.infrastructure.realtime.socketio_server import current_registry
from lumina.repositories.message_repository import MessageRepository
from lumina.repositories.notification_repository import NotificationRepository
from lumina.repositories.product_repository import ProductRepository
from lumina.repositories.user_repository import UserRepository
from lumina.services.conversation_service import ConversationService
from lumina.services.message_service import MessageService
from lumina.services.notification_service import NotificationService

bp_msg = Blueprint("messages", __name__)


def _pack_response(msg, product) -> dict:
    return MessageResponse(
        id=msg.id,
        sender_id=msg.sender_id,
        receiver_id=msg.receiver_id,
        content=msg.content,
        product=(
            ProductSummaryResponse(id=product.id, title=product.title, image=product.image_url or "")
            if product is not None
            else None
        ),
        created_at=msg.created_at,
    ).model_dump()


def _build_service(session, notifier: NotificationNotifier | None = None) -> MessageService:
    return MessageService(
        msg_repo=MessageRepository(session),
        user_repo=UserRepository(session),
        product_repo=ProductRepository(session),
        notification_service=NotificationService(
            NotificationRepository(session),
            notifier=notifier,
        ),
    )


@bp_msg.post("")
@require_auth
def send_message():
    user_id = current_user_id()
    payload = SendMessageRequest.model_validate(request.get_json(force=True))

    pending = PendingNotifications()
    with db_session() as session:
        svc = _build_service(session, notifier=pending)
        msg, product = svc.send_message(
            sender_id=user_id,
            receiver_id=payload.receiver_id,
            content=payload.content,
            product_id=payload.product_id,
        )
        body = _pack_response(msg, product)

    # only announce what was committed
    pending.flush_to(SocketIONotificationNotifier(current_registry()))

    return jsonify(body), 201


@bp_msg.get("/conversations/list")
@require_auth
def list_conversations():
    user_id = current_user_id()

    with db_session() as session:
        svc = ConversationService(msg_repo=MessageRepository(session), user_repo=UserRepository(session))
        items = svc.list_conversations(user_id=user_id)

    return jsonify([ConversationListItemResponse(**asdict(c)).model_dump() for c in items]), 200


@bp_msg.get("/<int:other_user_id>")
@require_auth
def get_conversation(other_user_id: int):
    user_id = current_user_id()
    limit = optional_int_arg("limit")
    before_id = optional_int_arg("before")

    with db_session() as session:
        svc = _build_service(session)
        rows = svc.get_conversation(
            user_id=user_id,
            other_user_id=other_user_id,
            limit=limit,
            before_id=before_id,
        )
        body = [_pack_response(msg, product) for msg, product in rows]

    return jsonify(body), 200
