"""Single-process room registry keyed by user identifier."""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Emitter(Protocol):
    def __call__(self, event: str, payload: Any, sid: str) -> None: ...


class RoomRegistry:
    """Track which socket connections are subscribed to which user's room.

    A connection (``sid``) belongs to at most one room, the one of the identity
    it authenticated as. A user may have several connections (one per tab) and
    :meth:`publish` fans out to all of them. Nothing is queued: publishing to
    an empty room drops the payload.
    """

    def __init__(self, emit: Emitter) -> None:
        self._emit = emit
        self._lock = threading.Lock()
        self._rooms: dict[int, set[str]] = {}
        self._sid_user: dict[str, int] = {}

    def join(self, sid: str, user_id: int) -> None:
        """Subscribe ``sid`` to the room of ``user_id``. Re-joining is a no-op."""

        with self._lock:
            previous = self._sid_user.get(sid)
            if previous is not None and previous != user_id:
                self._discard(sid, previous)
            self._sid_user[sid] = user_id
            self._rooms.setdefault(user_id, set()).add(sid)

        logger.info("socket %s joined room %s", sid, user_id)

    def leave(self, sid: str) -> int | None:
        """Drop ``sid`` from its room; returns the user id it was joined to."""

        with self._lock:
            user_id = self._sid_user.pop(sid, None)
            if user_id is not None:
                self._discard(sid, user_id)

        if user_id is not None:
            logger.info("socket %s left room %s", sid, user_id)
        return user_id

    def _discard(self, sid: str, user_id: int) -> None:
        members = self._rooms.get(user_id)
        if members is None:
            return
        members.discard(sid)
        if not members:
            self._rooms.pop(user_id, None)

    def members(self, user_id: int) -> set[str]:
        with self._lock:
            return set(self._rooms.get(user_id, ()))

    def is_online(self, user_id: int) -> bool:
        with self._lock:
            return bool(self._rooms.get(user_id))

    def online_count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def publish(self, user_id: int, event: str, payload: Any) -> int:
        """Deliver ``payload`` to every connection in ``user_id``'s room.

        Returns how many connections it was handed to.
        """

        sids = self.members(user_id)
        if not sids:
            logger.debug("no subscribers in room %s, dropping %s", user_id, event)
            return 0

        for sid in sids:
            self._emit(event, payload, sid)
        return len(sids)
