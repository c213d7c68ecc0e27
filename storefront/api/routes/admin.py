"""Admin panel routes for the contact inbox and customer accounts.

Access control sits in front of this service; these handlers assume the
caller has already been authenticated as an admin.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from storefront.config import settings
from storefront.errors import DocumentNotFoundError
from storefront.models.contact import (
    MessageDeleteRequest,
    MessageListResponse,
    MessageMutationResponse,
    MessagePagination,
    MessageUpdateRequest,
)
from storefront.models.product import Pagination
from storefront.models.user import UserListResponse, UserPublic
from storefront.services.catalog.pagination import (
    coerce_bool,
    normalize_page,
    normalize_page_size,
)
from storefront.services.storage.contacts import ContactInboxDependency
from storefront.services.storage.users import UserDirectoryDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

OptionalParam = Annotated[str | None, Query()]


def _read_filter(value: str | None) -> bool | None:
    if value is None or not value.strip():
        return None
    return bool(coerce_bool(value))


@router.get(
    "/messages",
    response_model=MessageListResponse,
    summary="List contact messages, newest first",
)
async def list_messages(
    inbox: ContactInboxDependency,
    page: OptionalParam = None,
    limit: OptionalParam = None,
    is_read: Annotated[str | None, Query(alias="isRead")] = None,
) -> MessageListResponse:
    current_page = normalize_page(page)
    page_size = normalize_page_size(
        limit, settings.ADMIN_PAGE_SIZE, settings.MAX_PAGE_SIZE
    )
    messages, total = await inbox.list_messages(
        page=current_page,
        page_size=page_size,
        is_read=_read_filter(is_read),
    )
    return MessageListResponse(
        messages=messages,
        pagination=MessagePagination(
            current_page=current_page,
            page_size=page_size,
            total_messages=total,
        ),
        unread_count=await inbox.unread_count(),
    )


@router.patch(
    "/messages",
    response_model=MessageMutationResponse,
    summary="Mark a contact message as read or unread",
)
async def update_message(
    payload: MessageUpdateRequest,
    inbox: ContactInboxDependency,
) -> MessageMutationResponse:
    try:
        message = await inbox.mark(payload.message_id, payload.is_read)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Message not found") from exc
    return MessageMutationResponse(message="Message updated successfully", data=message)


@router.delete(
    "/messages",
    response_model=MessageMutationResponse,
    summary="Delete a contact message",
)
async def delete_message(
    payload: MessageDeleteRequest,
    inbox: ContactInboxDependency,
) -> MessageMutationResponse:
    try:
        message = await inbox.delete(payload.message_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Message not found") from exc
    return MessageMutationResponse(message="Message deleted successfully", data=message)


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="List customer accounts, newest first",
)
async def list_users(
    directory: UserDirectoryDependency,
    page: OptionalParam = None,
    limit: OptionalParam = None,
    search: OptionalParam = None,
) -> UserListResponse:
    current_page = normalize_page(page)
    page_size = normalize_page_size(
        limit, settings.ADMIN_PAGE_SIZE, settings.MAX_PAGE_SIZE
    )
    users, total = await directory.list_users(
        page=current_page,
        page_size=page_size,
        search=search,
    )
    return UserListResponse(
        users=[UserPublic.from_user(user) for user in users],
        pagination=Pagination(page=current_page, limit=page_size, total=total),
    )


@router.delete(
    "/users/{user_id}",
    summary="Delete a customer account",
)
async def delete_user(
    user_id: str,
    directory: UserDirectoryDependency,
) -> dict[str, str]:
    try:
        await directory.delete(user_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="User not found") from exc
    return {"message": "User deleted successfully"}
