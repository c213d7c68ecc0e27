"""Public contact form."""

from __future__ import annotations

from fastapi import APIRouter, status

from storefront.models.contact import ContactAccepted, ContactPayload
from storefront.services.storage.contacts import ContactInboxDependency

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post(
    "",
    response_model=ContactAccepted,
    status_code=status.HTTP_201_CREATED,
    summary="Leave a message for the store",
)
async def submit_contact(
    payload: ContactPayload,
    inbox: ContactInboxDependency,
) -> ContactAccepted:
    await inbox.submit(payload)
    return ContactAccepted()
