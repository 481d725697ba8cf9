from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from lumina.core.exceptions import UnauthorizedError
from lumina.infrastructure.security.jwt_provider import JwtProvider

F = TypeVar("F", bound=Callable[..., Any])


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise UnauthorizedError("Missing token.")


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _get_bearer_token()
        g.auth = JwtProvider().decode(token)
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    auth = getattr(g, "auth", None)
    if not auth:
        raise UnauthorizedError("Missing token.")
    return int(auth["sub"])
