# lumina/infrastructure/database/models/notification_model.py

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lumina.entities.notification import NotificationKind
from lumina.infrastructure.database.base_model import BaseModel, IdType, utcnow


class NotificationModel(BaseModel):
    __tablename__ = "tbNotifications"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    recipient_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbUsers.id"), nullable=False, index=True)
    sender_id: Mapped[int] = mapped_column(IdType, ForeignKey("tbUsers.id"), nullable=True)

    kind: Mapped[str] = mapped_column(String(20), nullable=False, default=NotificationKind.SYSTEM.value)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # message id, sale id... depending on kind
    related_id: Mapped[int] = mapped_column(BigInteger, nullable=True)

    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
