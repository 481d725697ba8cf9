# lumina/api/schemas/notification_schema.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_serializer

from lumina.api.schemas._datetime_serializer import serialize_dt
from lumina.entities.notification import NotificationKind


class NotificationResponse(BaseModel):
    id: int
    recipient_id: int
    sender_id: Optional[int] = None
    type: NotificationKind
    message: str
    related_id: Optional[int] = None
    read: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    updated: int
