"""Client-side chat state machine.

``ChatState`` holds everything a chat screen renders: the inbox, the open
thread, the pinned product and the delivery status of messages the user just
typed. It performs no I/O; :class:`lumina.client.chat_client.ChatClient`
drives it from HTTP responses and socket events.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class ChatPhase(str, Enum):
    NO_CONVERSATION_SELECTED = "NO_CONVERSATION_SELECTED"
    LOADING_HISTORY = "LOADING_HISTORY"
    CONVERSATION_ACTIVE = "CONVERSATION_ACTIVE"
    SENDING_OPTIMISTIC = "SENDING_OPTIMISTIC"


class DeliveryStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"


class InboundResult(str, Enum):
    APPENDED = "APPENDED"
    DUPLICATE = "DUPLICATE"
    OTHER_CONVERSATION = "OTHER_CONVERSATION"


def _parse_dt(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now(tz=timezone.utc)


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ChatMessage:
    sender_id: int
    receiver_id: int
    content: str
    created_at: datetime
    server_id: int | None = None
    temp_id: str | None = None
    product: dict[str, Any] | None = None
    status: DeliveryStatus = DeliveryStatus.CONFIRMED

    @property
    def key(self) -> int | str | None:
        return self.server_id if self.server_id is not None else self.temp_id

    def matches(self, other_id: Any) -> bool:
        if other_id is None:
            return False
        if self.temp_id is not None and str(other_id) == self.temp_id:
            return True
        return self.server_id is not None and _as_int(other_id) == self.server_id

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ChatMessage":
        """Build from a ``MessageResponse`` JSON object."""
        return cls(
            server_id=int(data["id"]),
            sender_id=int(data["sender_id"]),
            receiver_id=int(data["receiver_id"]),
            content=data["content"],
            created_at=_parse_dt(data.get("created_at")),
            product=data.get("product"),
        )

    @classmethod
    def from_event(cls, data: dict[str, Any], *, receiver_fallback: int) -> "ChatMessage":
        """Build from a ``receive_message`` socket payload."""
        raw_id = data.get("id")
        server_id = _as_int(raw_id)
        receiver = _as_int(data.get("receiverId", data.get("receiver")))
        return cls(
            server_id=server_id,
            temp_id=None if server_id is not None or raw_id is None else str(raw_id),
            sender_id=int(data["sender"]),
            receiver_id=receiver if receiver is not None else receiver_fallback,
            content=str(data.get("content", "")),
            created_at=_parse_dt(data.get("createdAt", data.get("created_at"))),
            product=data.get("product") if isinstance(data.get("product"), dict) else None,
        )


@dataclass
class ChatState:
    user_id: int
    phase: ChatPhase = ChatPhase.NO_CONVERSATION_SELECTED
    partner_id: int | None = None
    messages: list[ChatMessage] = field(default_factory=list)
    pinned_product: dict[str, Any] | None = None
    conversations: list[dict[str, Any]] = field(default_factory=list)
    loading_conversations: bool = False

    # --- conversation list ---

    def set_conversations(self, items: list[dict[str, Any]]) -> None:
        self.conversations = list(items)
        self.loading_conversations = False

    def find_conversation(self, partner_id: int) -> dict[str, Any] | None:
        for item in self.conversations:
            if _as_int(item.get("other_party_id")) == partner_id:
                return item
        return None

    # --- history ---

    def begin_loading(self, partner_id: int) -> None:
        self.partner_id = partner_id
        self.phase = ChatPhase.LOADING_HISTORY
        self.messages = []
        self.pinned_product = None

    def history_loaded(self, partner_id: int, history: list[ChatMessage]) -> bool:
        """Install the fetched thread; returns False when the result is stale."""
        if self.partner_id != partner_id or self.phase != ChatPhase.LOADING_HISTORY:
            return False

        # keep live messages that arrived while the fetch was in flight
        extra = [m for m in self.messages if not any(h.matches(m.key) for h in history)]
        self.messages = list(history) + extra

        self.pinned_product = None
        for msg in reversed(history):
            if msg.product:
                self.pinned_product = msg.product
                break

        self.phase = ChatPhase.CONVERSATION_ACTIVE
        return True

    def history_failed(self, partner_id: int) -> bool:
        if self.partner_id != partner_id:
            return False
        self.partner_id = None
        self.messages = []
        self.pinned_product = None
        self.phase = ChatPhase.NO_CONVERSATION_SELECTED
        return True

    # --- optimistic send ---

    def add_optimistic(self, content: str) -> ChatMessage:
        if self.partner_id is None:
            raise RuntimeError("no conversation selected")

        msg = ChatMessage(
            temp_id=f"tmp-{uuid4().hex}",
            sender_id=self.user_id,
            receiver_id=self.partner_id,
            content=content,
            created_at=datetime.now(tz=timezone.utc),
            product=self.pinned_product,
            status=DeliveryStatus.PENDING,
        )
        self.messages.append(msg)
        self.phase = ChatPhase.SENDING_OPTIMISTIC
        return msg

    def _index_of_temp(self, temp_id: str) -> int | None:
        for i, msg in enumerate(self.messages):
            if msg.temp_id == temp_id:
                return i
        return None

    def _settle_phase(self) -> None:
        if self.phase != ChatPhase.SENDING_OPTIMISTIC:
            return
        if not any(m.status == DeliveryStatus.PENDING for m in self.messages):
            self.phase = ChatPhase.CONVERSATION_ACTIVE

    def confirm(self, temp_id: str, data: dict[str, Any]) -> ChatMessage | None:
        """Swap the temp entry for the server's id and timestamp."""
        idx = self._index_of_temp(temp_id)
        if idx is None:
            return None

        server_id = int(data["id"])
        # the realtime echo may already have rendered the server copy
        self.messages = [
            m for i, m in enumerate(self.messages) if i == idx or m.server_id != server_id
        ]
        idx = self._index_of_temp(temp_id)

        confirmed = replace(
            self.messages[idx],
            server_id=server_id,
            created_at=_parse_dt(data.get("created_at")),
            product=data.get("product", self.messages[idx].product),
            status=DeliveryStatus.CONFIRMED,
        )
        self.messages[idx] = confirmed
        self._settle_phase()
        return confirmed

    def fail(self, temp_id: str) -> ChatMessage | None:
        idx = self._index_of_temp(temp_id)
        if idx is None:
            return None
        failed = replace(self.messages[idx], status=DeliveryStatus.FAILED)
        self.messages[idx] = failed
        self._settle_phase()
        return failed

    def mark_retrying(self, temp_id: str) -> ChatMessage | None:
        idx = self._index_of_temp(temp_id)
        if idx is None or self.messages[idx].status != DeliveryStatus.FAILED:
            return None
        retrying = replace(self.messages[idx], status=DeliveryStatus.PENDING)
        self.messages[idx] = retrying
        self.phase = ChatPhase.SENDING_OPTIMISTIC
        return retrying

    # --- realtime ---

    def receive(self, msg: ChatMessage) -> InboundResult:
        counterpart = msg.receiver_id if msg.sender_id == self.user_id else msg.sender_id
        if self.partner_id is None or counterpart != self.partner_id:
            return InboundResult.OTHER_CONVERSATION

        if any(m.matches(msg.key) for m in self.messages):
            return InboundResult.DUPLICATE

        self.messages.append(msg)
        return InboundResult.APPENDED
