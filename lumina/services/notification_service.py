# lumina/services/notification_service.py

from __future__ import annotations

import logging
from datetime import timezone

from lumina.core.exceptions import NotFoundError
from lumina.core.interfaces.notification_notifier import (
    NotificationCreatedEvent,
    NotificationNotifier,
)
from lumina.entities.notification import NotificationKind
from lumina.infrastructure.database.models.notification_model import NotificationModel
from lumina.repositories.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(
        self,
        notification_repository: NotificationRepository,
        notifier: NotificationNotifier | None = None,
    ) -> None:
        self._repo = notification_repository
        self._notifier = notifier

    def create_notification(
        self,
        *,
        recipient_id: int,
        kind: NotificationKind,
        text: str,
        sender_id: int | None = None,
        related_id: int | None = None,
        sender: dict | None = None,
    ) -> NotificationModel:
        model = NotificationModel(
            recipient_id=recipient_id,
            sender_id=sender_id,
            kind=NotificationKind(kind).value,
            text=text,
            related_id=related_id,
            read=False,
        )
        model = self._repo.add(model)
        logger.info("notification %s (%s) created for user %s", model.id, model.kind, recipient_id)

        if self._notifier is not None:
            self._notifier.notify_notification_created(
                NotificationCreatedEvent(
                    notification_id=model.id,
                    recipient_id=recipient_id,
                    kind=model.kind,
                    text=model.text,
                    created_at_iso=model.created_at.astimezone(timezone.utc).isoformat(),
                    sender_id=sender_id,
                    related_id=related_id,
                    sender=sender,
                )
            )
        return model

    def list_notifications(
        self, *, user_id: int, unread_only: bool = False, limit: int = 50, offset: int = 0
    ) -> list[NotificationModel]:
        return self._repo.list_by_recipient(user_id, unread_only=unread_only, limit=limit, offset=offset)

    def unread_count(self, *, user_id: int) -> int:
        return self._repo.count_unread(user_id)

    def mark_read(self, *, notification_id: int, user_id: int) -> NotificationModel:
        """Flag a notification as read. Marking it twice is harmless."""
        notification = self._repo.get_for_recipient(notification_id=notification_id, recipient_id=user_id)
        if notification is None:
            raise NotFoundError("Notification not found.")

        if not notification.read:
            notification.read = True
            self._repo.add(notification)
        return notification

    def mark_all_read(self, *, user_id: int) -> int:
        return self._repo.mark_all_read(user_id)
