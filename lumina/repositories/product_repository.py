# lumina/repositories/product_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from lumina.core.base_repository import BaseRepository
from lumina.infrastructure.database.models.product_model import ProductModel


class ProductRepository(BaseRepository[ProductModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, product_id: int) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        return self._session.execute(stmt).scalar_one_or_none()
