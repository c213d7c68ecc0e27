"""Contact-form inbox stored alongside the catalog."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from storefront.models.contact import ContactMessage, ContactPayload
from storefront.services.catalog.pagination import page_window
from storefront.services.storage.document_store import (
    RedisDocumentStore,
    get_redis_client,
)

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "General Inquiry"


class ContactInbox:
    """Stores customer messages and serves the admin inbox."""

    def __init__(self, store: RedisDocumentStore[ContactMessage]) -> None:
        self._store = store

    async def submit(self, payload: ContactPayload) -> ContactMessage:
        message = ContactMessage(
            name=payload.name,
            email=str(payload.email),
            message=payload.message,
            topic=(payload.topic or "").strip() or DEFAULT_TOPIC,
        )
        await self._store.insert(message)
        logger.info(
            "Contact message received",
            extra={"message_id": message.id, "topic": message.topic},
        )
        return message

    async def list_messages(
        self,
        *,
        page: int,
        page_size: int,
        is_read: bool | None = None,
    ) -> tuple[list[ContactMessage], int]:
        """Newest first; returns the requested page and the filtered total."""
        messages = list(reversed(await self._store.all()))
        if is_read is not None:
            messages = [message for message in messages if message.is_read is is_read]
        messages.sort(key=lambda message: message.created_at, reverse=True)
        skip, limit = page_window(page, page_size)
        return messages[skip : skip + limit], len(messages)

    async def unread_count(self) -> int:
        return await self._store.count(lambda message: not message.is_read)

    async def mark(self, message_id: str, is_read: bool) -> ContactMessage:
        message = await self._store.require(message_id)
        updated = message.model_copy(
            update={"is_read": is_read, "updated_at": datetime.now(UTC)}
        )
        await self._store.replace(updated)
        return updated

    async def delete(self, message_id: str) -> ContactMessage:
        return await self._store.delete(message_id)


def get_contact_inbox(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> ContactInbox:
    return ContactInbox(RedisDocumentStore(client, "contacts", ContactMessage))


ContactInboxDependency = Annotated[ContactInbox, Depends(get_contact_inbox)]
