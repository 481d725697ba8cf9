# lumina/services/conversation_service.py
from __future__ import annotations

from collections.abc import Iterable

from lumina.entities.conversation import ConversationSummary
from lumina.infrastructure.database.models.message_model import MessageModel
from lumina.repositories.message_repository import MessageRepository
from lumina.repositories.user_repository import UserRepository

UNKNOWN_USER_NAME = "Unknown user"


def latest_by_partner(user_id: int, messages_newest_first: Iterable[MessageModel]) -> list[tuple[int, MessageModel]]:
    """Pick the newest message per other party.

    ``messages_newest_first`` must already be sorted newest first; the first
    message seen for a party wins and the output keeps that first-seen order,
    which is therefore newest conversation first.
    """

    seen: set[int] = set()
    out: list[tuple[int, MessageModel]] = []
    for msg in messages_newest_first:
        other = msg.receiver_id if msg.sender_id == user_id else msg.sender_id
        if other in seen:
            continue
        seen.add(other)
        out.append((other, msg))
    return out


class ConversationService:
    def __init__(self, *, msg_repo: MessageRepository, user_repo: UserRepository) -> None:
        self._msg_repo = msg_repo
        self._user_repo = user_repo

    def list_conversations(self, *, user_id: int) -> list[ConversationSummary]:
        messages = self._msg_repo.list_involving_newest_first(user_id)
        latest = latest_by_partner(user_id, messages)
        users = self._user_repo.get_many_by_ids(other for other, _ in latest)

        out = []
        for other, msg in latest:
            user = users.get(other)
            out.append(
                ConversationSummary(
                    other_party_id=other,
                    name=user.name if user else UNKNOWN_USER_NAME,
                    avatar=(user.avatar or "") if user else "",
                    last_message=msg.content,
                    last_message_at=msg.created_at,
                    last_message_id=msg.id,
                )
            )
        return out
