# lumina/infrastructure/database/models/product_model.py

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lumina.infrastructure.database.base_model import BaseModel, IdType, utcnow


class ProductModel(BaseModel):
    """Listing owned by the catalogue service; the chat only reads title and image."""

    __tablename__ = "tbProducts"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    seller_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbUsers.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
