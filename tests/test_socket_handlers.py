from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from lumina.infrastructure.realtime.socketio_server import socketio


def _events(sc, name):
    return [pkt["args"][0] for pkt in sc.get_received() if pkt["name"] == name]


def test_connection_without_token_is_refused(socket_client):
    sc = socket_client()

    assert not sc.is_connected()


def test_connection_with_bad_token_is_refused(socket_client):
    sc = socket_client(token="garbage")

    assert not sc.is_connected()


def test_join_own_room(socket_client, make_user, registry):
    alice = make_user("Alice")
    sc = socket_client(alice)
    assert sc.is_connected()

    sc.emit("join_room", alice)

    assert _events(sc, "room_joined") == [{"user_id": alice}]
    assert registry.is_online(alice)


def test_join_accepts_object_payload(socket_client, make_user, registry):
    alice = make_user("Alice")
    sc = socket_client(alice)

    sc.emit("join_room", {"userId": str(alice)})

    assert _events(sc, "room_joined") == [{"user_id": alice}]


def test_joining_another_users_room_is_rejected(socket_client, make_user, registry):
    alice = make_user("Alice")
    bob = make_user("Bob")
    sc = socket_client(alice)

    sc.emit("join_room", bob)

    assert _events(sc, "room_error")
    assert not registry.is_online(bob)


def test_relay_reaches_every_tab_of_the_receiver(socket_client, make_user):
    alice = make_user("Alice")
    bob = make_user("Bob")
    sender = socket_client(alice)
    tab_1 = socket_client(bob)
    tab_2 = socket_client(bob)
    sender.emit("join_room", alice)
    tab_1.emit("join_room", bob)
    tab_2.emit("join_room", bob)
    for sc in (sender, tab_1, tab_2):
        sc.get_received()

    ack = sender.emit(
        "send_message",
        {"sender": 999, "receiverId": bob, "content": "hi", "id": 17, "createdAt": "2026-01-01T00:00:00+00:00"},
        callback=True,
    )

    assert ack == {"delivered": 2}
    expected = {"sender": alice, "receiverId": bob, "content": "hi", "id": 17, "createdAt": "2026-01-01T00:00:00+00:00"}
    assert _events(tab_1, "receive_message") == [expected]
    assert _events(tab_2, "receive_message") == [expected]
    assert _events(sender, "receive_message") == []


def test_relay_to_offline_user_is_dropped(socket_client, make_user):
    alice = make_user("Alice")
    bob = make_user("Bob")
    sender = socket_client(alice)

    ack = sender.emit("send_message", {"receiverId": bob, "content": "hello?"}, callback=True)

    assert ack == {"delivered": 0}


def test_relay_without_receiver_is_reported(socket_client, make_user):
    alice = make_user("Alice")
    sender = socket_client(alice)

    ack = sender.emit("send_message", {"content": "to nobody"}, callback=True)

    assert ack == {"delivered": 0}
    assert _events(sender, "room_error")


def test_rest_send_pushes_notification_to_receiver(client, socket_client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    bob_socket = socket_client(bob)
    bob_socket.emit("join_room", bob)
    bob_socket.get_received()

    resp = client.post("/api/messages", json={"receiver_id": bob, "content": "hey"}, headers=auth_headers(alice))
    assert resp.status_code == 201

    notes = _events(bob_socket, "notification:new")
    assert len(notes) == 1
    assert notes[0]["type"] == "MESSAGE"
    assert notes[0]["recipient_id"] == bob
    assert notes[0]["sender_id"] == alice
    assert notes[0]["related_id"] == resp.get_json()["id"]
    assert notes[0]["read"] is False
    assert notes[0]["sender"]["name"] == "Alice"


def test_disconnect_leaves_the_room(socket_client, make_user, registry):
    bob = make_user("Bob")
    sc = socket_client(bob)
    sc.emit("join_room", bob)
    assert registry.is_online(bob)

    sc.disconnect()

    assert not registry.is_online(bob)


def test_token_can_be_sent_as_query_string(app, make_user, access_token):
    alice = make_user("Alice")
    sc = socketio.test_client(app, query_string=f"token={access_token(alice)}")
    try:
        assert sc.is_connected()
    finally:
        if sc.is_connected():
            sc.disconnect()


def test_rolled_back_send_pushes_no_notification(client, socket_client, make_user, auth_headers, monkeypatch):
    alice = make_user("Alice")
    bob = make_user("Bob")
    bob_socket = socket_client(bob)
    bob_socket.emit("join_room", bob)
    bob_socket.get_received()

    def broken_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", broken_commit)
    resp = client.post("/api/messages", json={"receiver_id": bob, "content": "hey"}, headers=auth_headers(alice))
    monkeypatch.undo()

    assert resp.status_code == 500
    assert _events(bob_socket, "notification:new") == []
