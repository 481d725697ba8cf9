# lumina/repositories/notification_repository.py

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from lumina.core.base_repository import BaseRepository
from lumina.infrastructure.database.models.notification_model import NotificationModel


class NotificationRepository(BaseRepository[NotificationModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_for_recipient(self, *, notification_id: int, recipient_id: int) -> NotificationModel | None:
        stmt = select(NotificationModel).where(
            NotificationModel.id == notification_id,
            NotificationModel.recipient_id == recipient_id,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def list_by_recipient(
        self,
        recipient_id: int,
        *,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[NotificationModel]:
        stmt = select(NotificationModel).where(NotificationModel.recipient_id == recipient_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.read.is_(False))

        stmt = (
            stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self._session.execute(stmt).scalars().all())

    def count_unread(self, recipient_id: int) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.read.is_(False),
        )
        return int(self._session.execute(stmt).scalar_one())

    def mark_all_read(self, recipient_id: int) -> int:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.recipient_id == recipient_id, NotificationModel.read.is_(False))
            .values(read=True)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)
