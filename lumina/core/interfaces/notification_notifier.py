# lumina/core/interfaces/notification_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NotificationCreatedEvent:
    notification_id: int
    recipient_id: int
    kind: str
    text: str
    created_at_iso: str

    sender_id: int | None = None
    related_id: int | None = None
    sender: dict[str, Any] | None = None


class NotificationNotifier(Protocol):
    def notify_notification_created(self, event: NotificationCreatedEvent) -> None:
        ...


class PendingNotifications:
    """Notifier that holds events until the surrounding transaction has committed.

    Hand it to the service inside ``db_session()`` and call :meth:`flush_to`
    after the block exits; a rollback skips the flush, so nothing is announced
    for rows that were never stored.
    """

    def __init__(self) -> None:
        self._events: list[NotificationCreatedEvent] = []

    def notify_notification_created(self, event: NotificationCreatedEvent) -> None:
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._events)

    def flush_to(self, notifier: NotificationNotifier) -> int:
        events, self._events = self._events, []
        for event in events:
            notifier.notify_notification_created(event)
        return len(events)
