from lumina.core.interfaces.notification_notifier import (
    NotificationCreatedEvent,
    PendingNotifications,
)


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def notify_notification_created(self, event):
        self.events.append(event)


def _event(notification_id):
    return NotificationCreatedEvent(
        notification_id=notification_id,
        recipient_id=2,
        kind="MESSAGE",
        text="New message from Alice.",
        created_at_iso="2026-01-01T00:00:00+00:00",
        sender_id=1,
    )


def test_events_are_held_until_flushed():
    pending = PendingNotifications()
    target = RecordingNotifier()

    pending.notify_notification_created(_event(1))
    pending.notify_notification_created(_event(2))

    assert target.events == []
    assert len(pending) == 2

    assert pending.flush_to(target) == 2
    assert [e.notification_id for e in target.events] == [1, 2]


def test_flush_empties_the_buffer():
    pending = PendingNotifications()
    target = RecordingNotifier()
    pending.notify_notification_created(_event(1))

    pending.flush_to(target)
    pending.flush_to(target)

    assert len(target.events) == 1
    assert len(pending) == 0
