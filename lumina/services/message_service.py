# lumina/services/message_service.py

from __future__ import annotations

import logging

from lumina.core.exceptions import NotFoundError, ValidationError
from lumina.entities.notification import NotificationKind
from lumina.infrastructure.database.models.message_model import MessageModel
from lumina.repositories.message_repository import MessageRepository
from lumina.repositories.product_repository import ProductRepository
from lumina.repositories.user_repository import UserRepository
from lumina.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 500


class MessageService:
    def __init__(
        self,
        *,
        msg_repo: MessageRepository,
        user_repo: UserRepository,
        product_repo: ProductRepository,
        notification_service: NotificationService,
    ) -> None:
        self._msg_repo = msg_repo
        self._user_repo = user_repo
        self._product_repo = product_repo
        self._notifications = notification_service

    def send_message(
        self,
        *,
        sender_id: int,
        receiver_id: int,
        content: str,
        product_id: int | None = None,
    ):
        """Persist a direct message and the receiver's MESSAGE notification.

        Both rows live in the caller's session, so they commit or roll back
        together. Returns ``(message, product | None)``.
        """
        if content is None or not content.strip():
            raise ValidationError("Message content must not be empty.")

        if receiver_id == sender_id:
            raise ValidationError("You cannot send a message to yourself.")

        sender = self._user_repo.get_by_id(sender_id)
        if sender is None:
            raise NotFoundError("Sender not found.")

        if self._user_repo.get_by_id(receiver_id) is None:
            raise NotFoundError("Receiver not found.")

        product = None
        if product_id is not None:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise NotFoundError("Product not found.")

        msg = self._msg_repo.add(
            MessageModel(
                sender_id=sender_id,
                receiver_id=receiver_id,
                product_id=product_id,
                content=content,
            )
        )
        logger.info("message %s persisted (%s -> %s)", msg.id, sender_id, receiver_id)

        text = f"New message from {sender.name}"
        if product is not None:
            text = f"{text} about {product.title}"

        self._notifications.create_notification(
            recipient_id=receiver_id,
            sender_id=sender_id,
            kind=NotificationKind.MESSAGE,
            text=f"{text}.",
            related_id=msg.id,
            sender={"id": sender.id, "name": sender.name, "avatar": sender.avatar},
        )
        return msg, product

    def get_conversation(
        self,
        *,
        user_id: int,
        other_user_id: int,
        limit: int | None = None,
        before_id: int | None = None,
    ):
        """Thread between two users, oldest first, as ``(message, product | None)`` rows."""
        if limit is None:
            return self._msg_repo.list_rows_between(user_a=user_id, user_b=other_user_id)

        limit = max(1, min(int(limit), MAX_PAGE_SIZE))
        return self._msg_repo.list_rows_between_page(
            user_a=user_id,
            user_b=other_user_id,
            limit=limit,
            before_id=before_id,
        )
