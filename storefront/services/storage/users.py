"""Customer accounts as seen by the admin panel."""

from __future__ import annotations

import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from storefront.models.user import User
from storefront.services.catalog.pagination import page_window
from storefront.services.storage.document_store import (
    RedisDocumentStore,
    get_redis_client,
)

logger = logging.getLogger(__name__)


class UserDirectory:
    """Read/delete access to customer accounts.

    Accounts are written by the sign-up flow through :meth:`add`; the admin
    panel only lists and removes them.
    """

    def __init__(self, store: RedisDocumentStore[User]) -> None:
        self._store = store

    async def add(self, user: User) -> User:
        email = user.email.strip().lower()
        await self._store.claim("email", email, user.id)
        user = user.model_copy(update={"email": email})
        try:
            await self._store.insert(user)
        except Exception:
            await self._store.release("email", email)
            raise
        return user

    async def list_users(
        self,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> tuple[list[User], int]:
        users = list(reversed(await self._store.all()))
        needle = (search or "").strip().lower()
        if needle:
            users = [
                user
                for user in users
                if needle in user.full_name.lower() or needle in user.email.lower()
            ]
        users.sort(key=lambda user: user.created_at, reverse=True)
        skip, limit = page_window(page, page_size)
        return users[skip : skip + limit], len(users)

    async def delete(self, user_id: str) -> User:
        user = await self._store.delete(user_id)
        await self._store.release("email", user.email)
        logger.info("Deleted user %s", user_id)
        return user


def get_user_directory(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> UserDirectory:
    return UserDirectory(RedisDocumentStore(client, "users", User))


UserDirectoryDependency = Annotated[UserDirectory, Depends(get_user_directory)]
