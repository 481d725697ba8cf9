"""Chat client: drives :class:`ChatState` from REST calls and socket events."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from lumina.client.chat_state import ChatMessage, ChatPhase, ChatState, InboundResult
from lumina.client.http_api import ApiError, ChatApi
from lumina.client.realtime import RealtimeConnection
from lumina.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ChangeListener = Callable[[ChatState], None]
ErrorListener = Callable[[Exception], None]


class ChatClient:
    """Chat screen logic for one logged-in user.

    ``on_change`` fires after every state transition (including the optimistic
    insert, before the send request goes out). ``on_error`` receives API
    failures that the state already reflects (failed send, failed load).
    """

    def __init__(
        self,
        *,
        api: ChatApi,
        connection: RealtimeConnection,
        user_id: int,
        on_change: ChangeListener | None = None,
        on_error: ErrorListener | None = None,
    ) -> None:
        self._api = api
        self._conn = connection
        self._on_change = on_change
        self._on_error = on_error
        self._lock = threading.RLock()
        self._closed = False
        self.state = ChatState(user_id=user_id)

    # --- lifecycle ---

    def start(self) -> None:
        self._conn.on("connect", self._on_connect)
        self._conn.on("receive_message", self._on_receive_message)
        self._conn.connect()
        self.refresh_conversations(show_loading=True)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._conn.disconnect()

    def _on_connect(self) -> None:
        self._conn.emit("join_room", self.state.user_id)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)

    def _report(self, exc: Exception) -> None:
        if self._on_error is not None:
            self._on_error(exc)

    # --- conversation list ---

    def refresh_conversations(self, *, show_loading: bool = False) -> None:
        if show_loading:
            with self._lock:
                self.state.loading_conversations = True
            self._notify()

        try:
            items = self._api.list_conversations()
        except ApiError as e:
            logger.warning("could not load conversations: %s", e)
            with self._lock:
                self.state.loading_conversations = False
            self._notify()
            self._report(e)
            return

        with self._lock:
            self.state.set_conversations(items)
        self._notify()

    # --- history ---

    def select_partner(self, partner_id: int) -> None:
        with self._lock:
            if self.state.partner_id == partner_id and self.state.phase != ChatPhase.NO_CONVERSATION_SELECTED:
                return
            self.state.begin_loading(partner_id)
        self._notify()

        try:
            raw = self._api.get_conversation(partner_id)
        except ApiError as e:
            logger.warning("could not load conversation with %s: %s", partner_id, e)
            with self._lock:
                changed = self.state.history_failed(partner_id)
            if changed:
                self._notify()
            self._report(e)
            return

        history = [ChatMessage.from_api(item) for item in raw]
        with self._lock:
            applied = self.state.history_loaded(partner_id, history)
        if not applied:
            logger.info("dropping stale history for %s", partner_id)
            return
        self._notify()

    def open_deep_link(self, receiver_id: Any) -> None:
        """Open the conversation named by a ``?receiverId=`` style link."""
        try:
            partner_id = int(receiver_id)
        except (TypeError, ValueError) as e:
            raise ValidationError("Invalid receiver id.") from e
        self.select_partner(partner_id)

    # --- send ---

    def send(self, text: str) -> ChatMessage:
        if text is None or not text.strip():
            raise ValidationError("Message content must not be empty.")

        with self._lock:
            if self.state.partner_id is None or self.state.phase == ChatPhase.LOADING_HISTORY:
                raise ValidationError("No conversation selected.")
            pending = self.state.add_optimistic(text)
        self._notify()

        return self._deliver(pending)

    def retry(self, temp_id: str) -> ChatMessage | None:
        with self._lock:
            pending = self.state.mark_retrying(temp_id)
        if pending is None:
            return None
        self._notify()
        return self._deliver(pending)

    def _deliver(self, pending: ChatMessage) -> ChatMessage:
        product_id = pending.product.get("id") if pending.product else None
        try:
            data = self._api.send_message(
                receiver_id=pending.receiver_id,
                content=pending.content,
                product_id=product_id,
            )
        except ApiError as e:
            logger.warning("send to %s failed: %s", pending.receiver_id, e)
            with self._lock:
                failed = self.state.fail(pending.temp_id)
            self._notify()
            self._report(e)
            return failed or pending

        with self._lock:
            confirmed = self.state.confirm(pending.temp_id, data)
        self._notify()

        self._conn.emit(
            "send_message",
            {
                "sender": self.state.user_id,
                "receiverId": pending.receiver_id,
                "content": pending.content,
                "id": data["id"],
                "product": data.get("product"),
                "createdAt": data.get("created_at"),
            },
        )
        return confirmed or pending

    # --- realtime ---

    def _on_receive_message(self, data: Any) -> None:
        if not isinstance(data, dict) or "sender" not in data:
            logger.debug("ignoring malformed receive_message: %r", data)
            return

        with self._lock:
            msg = ChatMessage.from_event(data, receiver_fallback=self.state.user_id)
            result = self.state.receive(msg)

        if result == InboundResult.APPENDED:
            self._notify()
        elif result == InboundResult.OTHER_CONVERSATION:
            self.refresh_conversations(show_loading=False)
