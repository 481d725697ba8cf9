# lumina/api/routes/auth_routes.py
import logging

from flask import Blueprint, jsonify, request

from lumina.api.schemas.user_schema import LoginRequest, TokenResponse
from lumina.api.routes.user_routes import pack_user
from lumina.infrastructure.database.session import db_session
from lumina.infrastructure.security.jwt_provider import JwtProvider
from lumina.repositories.user_repository import UserRepository
from lumina.services.user_service import UserService

logger = logging.getLogger(__name__)

bp_auth = Blueprint("auth", __name__)


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        user = UserService(UserRepository(session)).authenticate(email=payload.email, password=payload.password)

        access = JwtProvider().issue_access_token(
            subject=str(user.id),
            payload={"email": user.email, "role": user.role, "name": user.name},
        )
        body = TokenResponse(access_token=access, user=pack_user(user)).model_dump(mode="json")

    logger.info("user %s logged in", body["user"]["id"])
    return jsonify(body), 200
