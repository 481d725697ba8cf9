# lumina/repositories/user_repository.py

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from lumina.core.base_repository import BaseRepository
from lumina.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_many_by_ids(self, user_ids: Iterable[int]) -> dict[int, UserModel]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        stmt = select(UserModel).where(UserModel.id.in_(ids))
        return {u.id: u for u in self._session.execute(stmt).scalars().all()}
