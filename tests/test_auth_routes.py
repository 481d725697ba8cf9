def _register(client, **overrides):
    body = {"name": "Dana", "email": "dana@example.com", "password": "long-enough-pw", **overrides}
    return client.post("/api/users", json=body)


def test_register_login_and_me(client):
    created = _register(client, avatar="/d.png")
    assert created.status_code == 201
    user = created.get_json()
    assert user["email"] == "dana@example.com"
    assert user["role"] == "USER"
    assert "password_hash" not in user

    login = client.post("/api/auth/login", json={"email": "DANA@example.com", "password": "long-enough-pw"})
    assert login.status_code == 200
    body = login.get_json()
    assert body["token_type"] == "Bearer"
    assert body["user"]["id"] == user["id"]

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.get_json()["avatar"] == "/d.png"


def test_duplicate_email_conflicts(client):
    _register(client)

    resp = _register(client, name="Other Dana")

    assert resp.status_code == 409


def test_wrong_password_is_unauthorized(client):
    _register(client)

    resp = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials."}


def test_short_password_is_rejected(client):
    resp = _register(client, password="short")

    assert resp.status_code == 422


def test_health(client):
    body = client.get("/health").get_json()
    assert body["status"] == "ok"
    assert "online_users" in body
    db = client.get("/health/db")
    assert db.status_code == 200
    assert db.get_json() == {"db": "ok", "dialect": "sqlite"}


def test_health_lives_outside_the_api_prefix(client):
    assert client.get("/health").status_code == 200
    assert client.get("/api/health").status_code == 404
