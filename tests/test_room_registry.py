from lumina.infrastructure.realtime.room_registry import RoomRegistry


class RecordingEmitter:
    def __init__(self):
        self.calls = []

    def __call__(self, event, payload, sid):
        self.calls.append((event, payload, sid))


def test_publish_fans_out_to_every_connection_of_the_user():
    emitter = RecordingEmitter()
    registry = RoomRegistry(emitter)
    registry.join("tab-1", 7)
    registry.join("tab-2", 7)

    delivered = registry.publish(7, "receive_message", {"content": "x"})

    assert delivered == 2
    assert sorted(sid for _, _, sid in emitter.calls) == ["tab-1", "tab-2"]


def test_publish_to_empty_room_is_dropped_silently():
    emitter = RecordingEmitter()
    registry = RoomRegistry(emitter)

    assert registry.publish(42, "receive_message", {"content": "x"}) == 0
    assert emitter.calls == []


def test_payload_is_handed_over_unmodified():
    emitter = RecordingEmitter()
    registry = RoomRegistry(emitter)
    registry.join("sid-a", 1)
    payload = {"content": "x"}

    registry.publish(1, "receive_message", payload)

    assert emitter.calls == [("receive_message", {"content": "x"}, "sid-a")]
    assert emitter.calls[0][1] is payload


def test_leave_removes_connection_and_empty_room():
    registry = RoomRegistry(RecordingEmitter())
    registry.join("sid-a", 1)

    assert registry.leave("sid-a") == 1
    assert registry.leave("sid-a") is None
    assert not registry.is_online(1)
    assert registry.members(1) == set()


def test_rejoin_is_idempotent():
    registry = RoomRegistry(RecordingEmitter())
    registry.join("sid-a", 1)
    registry.join("sid-a", 1)

    assert registry.members(1) == {"sid-a"}


def test_connection_moves_when_it_joins_another_room():
    registry = RoomRegistry(RecordingEmitter())
    registry.join("sid-a", 1)
    registry.join("sid-a", 2)

    assert registry.members(1) == set()
    assert registry.members(2) == {"sid-a"}


def test_leaving_one_tab_keeps_the_other_subscribed():
    emitter = RecordingEmitter()
    registry = RoomRegistry(emitter)
    registry.join("tab-1", 3)
    registry.join("tab-2", 3)
    registry.leave("tab-1")

    assert registry.publish(3, "ping", {}) == 1
    assert emitter.calls == [("ping", {}, "tab-2")]


def test_online_count_counts_users_not_connections():
    registry = RoomRegistry(RecordingEmitter())
    registry.join("tab-1", 1)
    registry.join("tab-2", 1)
    registry.join("tab-3", 2)

    assert registry.online_count() == 2
