"""Shared fixtures.

Settings are read once at import time, so the test environment is put in
place before anything from ``lumina`` is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SOCKETIO_ASYNC_MODE"] = "threading"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PASSWORD_ITERATIONS"] = "1000"
os.environ["API_PREFIX"] = "/api"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest  # noqa: E402

from lumina.infrastructure.database.models.product_model import ProductModel  # noqa: E402
from lumina.infrastructure.database.session import create_all, db_session, drop_all  # noqa: E402
from lumina.infrastructure.realtime.socketio_server import socketio  # noqa: E402
from lumina.infrastructure.security.jwt_provider import JwtProvider  # noqa: E402
from lumina.main import create_app  # noqa: E402
from lumina.repositories.user_repository import UserRepository  # noqa: E402
from lumina.services.user_service import UserService  # noqa: E402


@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture(autouse=True)
def clean_db():
    create_all()
    yield
    drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def registry(app):
    return app.extensions["room_registry"]


@pytest.fixture()
def make_user():
    counter = {"n": 0}

    def _make(name: str = "User", *, role: str = "USER", avatar: str = "") -> int:
        counter["n"] += 1
        with db_session() as session:
            user = UserService(UserRepository(session)).create_user(
                name=name,
                email=f"{name.lower().replace(' ', '.')}.{counter['n']}@example.com",
                password="secret-password",
                role=role,
                avatar=avatar,
            )
            return user.id

    return _make


@pytest.fixture()
def make_product():
    def _make(title: str = "Mountain print", image_url: str = "/uploads/mountain.png", seller_id=None) -> int:
        with db_session() as session:
            product = ProductModel(title=title, image_url=image_url, price=10, seller_id=seller_id)
            session.add(product)
            session.flush()
            return product.id

    return _make


def token_for(user_id: int) -> str:
    return JwtProvider().issue_access_token(subject=str(user_id))


@pytest.fixture()
def auth_headers():
    def _headers(user_id: int) -> dict:
        return {"Authorization": f"Bearer {token_for(user_id)}"}

    return _headers


@pytest.fixture()
def socket_client(app):
    clients = []

    def _connect(user_id: int | None = None, *, token: str | None = None):
        auth = {}
        if token is not None:
            auth["token"] = token
        elif user_id is not None:
            auth["token"] = token_for(user_id)
        sc = socketio.test_client(app, auth=auth)
        clients.append(sc)
        return sc

    yield _connect

    for sc in clients:
        if sc.is_connected():
            sc.disconnect()


@pytest.fixture()
def access_token():
    return token_for
