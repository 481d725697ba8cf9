# lumina/api/routes/user_routes.py

from __future__ import annotations

from flask import Blueprint, jsonify, request

from lumina.api.middlewares.auth_middleware import current_user_id, require_auth
from lumina.api.schemas.user_schema import CreateUserRequest, UserResponse
from lumina.infrastructure.database.session import db_session
from lumina.repositories.user_repository import UserRepository
from lumina.services.user_service import UserService

bp_users = Blueprint("users", __name__)


def _build_service(session) -> UserService:
    return UserService(UserRepository(session))


def pack_user(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar or "",
        role=user.role,
        created_at=user.created_at,
    )


@bp_users.post("")
def create_user():
    payload = CreateUserRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        created = _build_service(session).create_user(**payload.model_dump())
        body = pack_user(created).model_dump(mode="json")

    return jsonify(body), 201


@bp_users.get("/me")
@require_auth
def me():
    user_id = current_user_id()

    with db_session() as session:
        user = _build_service(session).get_user(user_id=user_id)
        body = pack_user(user).model_dump(mode="json")

    return jsonify(body), 200
