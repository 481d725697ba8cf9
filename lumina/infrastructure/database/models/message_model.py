# lumina/infrastructure/database/models/message_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from lumina.infrastructure.database.base_model import BaseModel, IdType, utcnow


class MessageModel(BaseModel):
    __tablename__ = "tbMessages"
    __table_args__ = (
        Index("ix_messages_sender_created", "sender_id", "created_at"),
        Index("ix_messages_receiver_created", "receiver_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    sender_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbUsers.id"), nullable=False)
    receiver_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbUsers.id"), nullable=False)

    # optional "about this product" context
    product_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbProducts.id"), nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
