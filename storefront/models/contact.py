"""Schemas for contact-form messages and their admin inbox."""

from __future__ import annotations

import math
import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator


class ContactPayload(BaseModel):
    """Incoming payload for POST /contact."""

    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=500)
    topic: str | None = Field(None, max_length=100)

    @field_validator("name", "message", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class ContactMessage(BaseModel):
    """Stored contact message."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    email: str
    message: str
    topic: str = "General Inquiry"
    is_read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.strip().lower()


class ContactAccepted(BaseModel):
    message: str = "Message sent successfully"


class MessagePagination(BaseModel):
    """Inbox pager metadata, keyed the way the admin panel reads it."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    page_size: int = Field(..., alias="limit")
    total_messages: int = Field(..., alias="totalMessages")

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if not self.total_messages:
            return 0
        return math.ceil(self.total_messages / self.page_size)

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @computed_field(alias="hasPrevPage")
    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


class MessageListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ContactMessage]
    pagination: MessagePagination
    unread_count: int = Field(..., alias="unreadCount")


class MessageUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(..., min_length=1, alias="messageId")
    is_read: bool = Field(..., alias="isRead")


class MessageDeleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(..., min_length=1, alias="messageId")


class MessageMutationResponse(BaseModel):
    message: str
    data: ContactMessage
