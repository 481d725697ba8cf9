# lumina/repositories/message_repository.py

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from lumina.core.base_repository import BaseRepository
from lumina.infrastructure.database.models.message_model import MessageModel
from lumina.infrastructure.database.models.product_model import ProductModel


class MessageRepository(BaseRepository[MessageModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _between(self, user_a: int, user_b: int):
        return or_(
            and_(MessageModel.sender_id == user_a, MessageModel.receiver_id == user_b),
            and_(MessageModel.sender_id == user_b, MessageModel.receiver_id == user_a),
        )

    def get_in_thread(self, *, message_id: int, user_a: int, user_b: int) -> MessageModel | None:
        stmt = select(MessageModel).where(MessageModel.id == message_id, self._between(user_a, user_b))
        return self._session.execute(stmt).scalar_one_or_none()

    def list_rows_between(self, *, user_a: int, user_b: int):
        stmt = (
            select(MessageModel, ProductModel)
            .outerjoin(ProductModel, ProductModel.id == MessageModel.product_id)
            .where(self._between(user_a, user_b))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return list(self._session.execute(stmt).all())

    def list_rows_between_page(self, *, user_a: int, user_b: int, limit: int, before_id: int | None = None):
        """Newest ``limit`` messages older than ``before_id``, returned oldest first."""
        stmt = (
            select(MessageModel, ProductModel)
            .outerjoin(ProductModel, ProductModel.id == MessageModel.product_id)
            .where(self._between(user_a, user_b))
        )

        if before_id is not None:
            cursor = self.get_in_thread(message_id=before_id, user_a=user_a, user_b=user_b)
            if cursor is None:
                return []
            stmt = stmt.where(
                or_(
                    MessageModel.created_at < cursor.created_at,
                    and_(MessageModel.created_at == cursor.created_at, MessageModel.id < cursor.id),
                )
            )

        stmt = stmt.order_by(MessageModel.created_at.desc(), MessageModel.id.desc()).limit(limit)
        rows = list(self._session.execute(stmt).all())
        rows.reverse()
        return rows

    def list_involving_newest_first(self, user_id: int) -> list[MessageModel]:
        # id breaks ties between equal timestamps
        stmt = (
            select(MessageModel)
            .where(or_(MessageModel.sender_id == user_id, MessageModel.receiver_id == user_id))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        return list(self._session.execute(stmt).scalars().all())
