# lumina/entities/conversation.py
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ConversationSummary:
    """One row of the inbox: the other party plus a preview of the newest message."""

    other_party_id: int
    name: str
    avatar: str
    last_message: str
    last_message_at: datetime
    last_message_id: int
