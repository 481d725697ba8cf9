# lumina/api/schemas/message_schema.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from lumina.api.schemas._datetime_serializer import serialize_dt


class ProductSummaryResponse(BaseModel):
    id: int
    title: str
    image: str


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    product: Optional[ProductSummaryResponse] = None
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)


class SendMessageRequest(BaseModel):
    receiver_id: int = Field(gt=0)
    content: str = Field(min_length=1, max_length=5000)
    product_id: Optional[int] = Field(default=None, gt=0)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


class ConversationListItemResponse(BaseModel):
    other_party_id: int
    name: str
    avatar: str
    last_message: str
    last_message_at: datetime
    last_message_id: int

    @field_serializer("last_message_at")
    def serialize_last_message_at(self, value: datetime):
        return serialize_dt(value)
