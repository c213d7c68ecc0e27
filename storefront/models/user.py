"""Customer account documents as exposed to the admin panel."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from storefront.models.product import Pagination


class User(BaseModel):
    """Stored customer account, written by the authentication service."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str | None = None
    password_hash: str | None = None
    provider: Literal["email", "google"] = "email"
    provider_id: str | None = None
    avatar: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class UserPublic(BaseModel):
    """User projection without credentials."""

    id: str
    full_name: str
    email: str
    phone: str | None = None
    provider: Literal["email", "google"]
    avatar: str = ""
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserPublic:
        return cls(**user.model_dump(exclude={"password_hash", "provider_id", "updated_at"}))


class UserListResponse(BaseModel):
    users: list[UserPublic]
    pagination: Pagination
