"""Thin ``requests`` wrapper around the chat REST endpoints."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationRequired(ApiError):
    """The token is missing, expired or revoked; the user has to log in again."""


class ChatApi:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if token:
            self.set_token(token)

    def set_token(self, token: str) -> None:
        self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        if resp.status_code == 401:
            raise AuthenticationRequired("Authentication required.", status_code=401)

        if resp.status_code >= 400:
            try:
                message = resp.json().get("error") or resp.reason
            except ValueError:
                message = resp.reason
            raise ApiError(str(message), status_code=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # auth

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.set_token(data["access_token"])
        return data

    # messages

    def send_message(self, *, receiver_id: int, content: str, product_id: int | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"receiver_id": receiver_id, "content": content}
        if product_id is not None:
            body["product_id"] = product_id
        return self._request("POST", "/messages", json=body)

    def list_conversations(self) -> list[dict[str, Any]]:
        return self._request("GET", "/messages/conversations/list")

    def get_conversation(
        self, other_user_id: int, *, limit: int | None = None, before: int | None = None
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if before is not None:
            params["before"] = before
        return self._request("GET", f"/messages/{other_user_id}", params=params or None)

    # notifications

    def list_notifications(self, *, unread_only: bool = False) -> list[dict[str, Any]]:
        params = {"unread_only": "true"} if unread_only else None
        return self._request("GET", "/notifications", params=params)

    def unread_count(self) -> int:
        return int(self._request("GET", "/notifications/unread-count")["unread"])

    def mark_notification_read(self, notification_id: int) -> dict[str, Any]:
        return self._request("PUT", f"/notifications/{notification_id}/read")
