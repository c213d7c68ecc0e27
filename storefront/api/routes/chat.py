"""Routes implementing the shopping assistant /chat API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.models.chat import ChatRequest, ChatResponse
from storefront.services.chat.assistant import ShoppingAssistant
from storefront.services.clients.decoder_client import DecoderDependency
from storefront.services.storage.product_collection import ProductCollectionDependency

router = APIRouter(prefix="/chat", tags=["chat"])


def _build_assistant(
    products: ProductCollectionDependency,
    decoder: DecoderDependency,
) -> ShoppingAssistant:
    return ShoppingAssistant(products, decoder)


AssistantDependency = Annotated[ShoppingAssistant, Depends(_build_assistant)]


@router.post(
    "",
    response_model=ChatResponse,
    summary="Ask the shopping assistant about products",
)
async def chat(
    payload: ChatRequest,
    assistant: AssistantDependency,
) -> ChatResponse:
    return await assistant.answer(payload)
