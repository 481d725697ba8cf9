"""Socket.IO connection used by the chat client."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

import socketio
from socketio.exceptions import SocketIOError

logger = logging.getLogger(__name__)


class RealtimeConnection(Protocol):
    def on(self, event: str, handler: Callable[..., Any]) -> None: ...

    def connect(self) -> None: ...

    def emit(self, event: str, data: Any) -> bool: ...

    def disconnect(self) -> None: ...


class SocketIOConnection:
    """``socketio.Client`` bound to one server URL and one bearer token.

    No reconnection is attempted once :meth:`disconnect` has been called.
    """

    def __init__(self, url: str, token: str, *, path: str = "socket.io") -> None:
        self._url = url
        self._token = token
        self._path = path
        self._client = socketio.Client(reconnection=True, logger=False)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self._client.on(event, handler)

    def connect(self) -> None:
        self._client.connect(
            self._url,
            auth={"token": self._token},
            socketio_path=self._path,
            transports=["websocket", "polling"],
        )

    def emit(self, event: str, data: Any) -> bool:
        try:
            self._client.emit(event, data)
        except SocketIOError as e:
            # the REST copy is durable; the live hint is best effort
            logger.warning("could not emit %s: %s", event, e)
            return False
        return True

    def disconnect(self) -> None:
        self._client.disconnect()
