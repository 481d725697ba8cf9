def _send(client, headers, receiver_id, content):
    resp = client.post("/api/messages", json={"receiver_id": receiver_id, "content": content}, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()


def test_receiver_lists_message_notifications_newest_first(client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    first = _send(client, auth_headers(alice), bob, "one")
    second = _send(client, auth_headers(alice), bob, "two")

    resp = client.get("/api/notifications", headers=auth_headers(bob))

    assert resp.status_code == 200
    items = resp.get_json()
    assert [n["related_id"] for n in items] == [second["id"], first["id"]]
    assert all(n["type"] == "MESSAGE" and n["read"] is False for n in items)
    assert items[0]["sender_id"] == alice
    assert items[0]["message"] == "New message from Alice."

    # the sender gets nothing
    assert client.get("/api/notifications", headers=auth_headers(alice)).get_json() == []


def test_mark_read_is_idempotent(client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    _send(client, auth_headers(alice), bob, "ping")
    note_id = client.get("/api/notifications", headers=auth_headers(bob)).get_json()[0]["id"]

    first = client.put(f"/api/notifications/{note_id}/read", headers=auth_headers(bob))
    second = client.put(f"/api/notifications/{note_id}/read", headers=auth_headers(bob))

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.get_json()["read"] is True
    assert second.get_json() == first.get_json()


def test_cannot_mark_someone_elses_notification(client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    _send(client, auth_headers(alice), bob, "ping")
    note_id = client.get("/api/notifications", headers=auth_headers(bob)).get_json()[0]["id"]

    resp = client.put(f"/api/notifications/{note_id}/read", headers=auth_headers(alice))

    assert resp.status_code == 404
    assert client.get("/api/notifications/unread-count", headers=auth_headers(bob)).get_json() == {"unread": 1}


def test_unknown_notification_is_not_found(client, make_user, auth_headers):
    alice = make_user("Alice")

    resp = client.put("/api/notifications/12345/read", headers=auth_headers(alice))

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Notification not found."}


def test_unread_count_and_read_all(client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    for text in ("a", "b", "c"):
        _send(client, auth_headers(alice), bob, text)

    assert client.get("/api/notifications/unread-count", headers=auth_headers(bob)).get_json() == {"unread": 3}

    resp = client.put("/api/notifications/read-all", headers=auth_headers(bob))
    assert resp.status_code == 200
    assert resp.get_json() == {"updated": 3}

    assert client.get("/api/notifications/unread-count", headers=auth_headers(bob)).get_json() == {"unread": 0}
    assert client.put("/api/notifications/read-all", headers=auth_headers(bob)).get_json() == {"updated": 0}


def test_unread_only_filter_and_paging(client, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    for text in ("a", "b", "c"):
        _send(client, auth_headers(alice), bob, text)
    oldest = client.get("/api/notifications", headers=auth_headers(bob)).get_json()[-1]
    client.put(f"/api/notifications/{oldest['id']}/read", headers=auth_headers(bob))

    unread = client.get("/api/notifications?unread_only=true", headers=auth_headers(bob)).get_json()
    assert len(unread) == 2
    assert oldest["id"] not in [n["id"] for n in unread]

    page = client.get("/api/notifications?limit=1&offset=1", headers=auth_headers(bob)).get_json()
    assert len(page) == 1


def test_notifications_require_a_token(client):
    assert client.get("/api/notifications").status_code == 401
    assert client.get("/api/notifications/unread-count").status_code == 401
    assert client.put("/api/notifications/read-all").status_code == 401


def test_non_integer_paging_values_are_rejected(client, make_user, auth_headers):
    bob = make_user("Bob")

    by_limit = client.get("/api/notifications?limit=abc", headers=auth_headers(bob))
    by_offset = client.get("/api/notifications?offset=1.5", headers=auth_headers(bob))

    assert by_limit.status_code == 422
    assert by_limit.get_json() == {"error": "Query parameter 'limit' must be an integer."}
    assert by_offset.status_code == 422
