"""Schemas used by the shopping assistant chat API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Incoming payload for POST /chat."""

    message: str = Field(..., min_length=1, max_length=2000)
    context: str | None = Field(
        None,
        description="Optional store description overriding the configured one",
    )

    @field_validator("message")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required")
        return value


class ChatProductMention(BaseModel):
    """Product the assistant was told about for this reply."""

    id: str
    name: str
    price: float
    score: int


class ChatResponse(BaseModel):
    response: str
    products: list[ChatProductMention] = Field(default_factory=list)
