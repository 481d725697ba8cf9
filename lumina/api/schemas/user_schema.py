# lumina/api/schemas/user_schema.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_serializer

from lumina.api.schemas._datetime_serializer import serialize_dt
from lumina.entities.user import UserRole


class CreateUserRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)
    role: UserRole = UserRole.USER
    avatar: str = Field(default="", max_length=500)


class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    avatar: str
    role: UserRole
    created_at: datetime | None = None

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime | None):
        return serialize_dt(value)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    user: UserResponse
