"""User model: each user is the root of its own tenant."""

import uuid

from pydantic import BaseModel, EmailStr
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from tasktenancy.models.base import TimestampMixin, new_uuid


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(default_factory=new_uuid, nullable=False, index=True)
    username: str = Field(max_length=30, nullable=False)
    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    password_hash: str = Field(nullable=False)


# ── Request / response schemas ───────────────────────────────

class RegisterRequest(BaseModel):
    username: str = PydanticField(min_length=3, max_length=30)
    email: EmailStr
    password: str = PydanticField(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = PydanticField(min_length=6)


class TokenResponse(BaseModel):
    token: str
