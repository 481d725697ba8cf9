# lumina/infrastructure/realtime/socketio_notification_notifier.py
from __future__ import annotations

from lumina.core.interfaces.notification_notifier import (
    NotificationCreatedEvent,
    NotificationNotifier,
)
from lumina.infrastructure.realtime.room_registry import RoomRegistry


class SocketIONotificationNotifier(NotificationNotifier):
    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry

    def notify_notification_created(self, event: NotificationCreatedEvent) -> None:
        payload = {
            "id": event.notification_id,
            "recipient_id": event.recipient_id,
            "sender_id": event.sender_id,
            "type": event.kind,
            "message": event.text,
            "related_id": event.related_id,
            "read": False,
            "created_at": event.created_at_iso,
        }
        if event.sender is not None:
            payload["sender"] = event.sender

        # best effort: offline recipients see it on their next GET /notifications
        self._registry.publish(event.recipient_id, "notification:new", payload)
