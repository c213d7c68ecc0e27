"""Shopping assistant: choose products for a message and phrase a reply."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from storefront.config import settings
from storefront.models.chat import ChatProductMention, ChatRequest, ChatResponse
from storefront.models.product import Product, ScoredProduct
from storefront.services.catalog.relevance import rank_products
from storefront.services.chat.prompt_builder import (
    build_product_context,
    build_system_prompt,
)
from storefront.services.clients.decoder_client import DecoderClient
from storefront.services.storage.product_collection import ProductCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductSelection:
    """Products to mention and whether they actually matched the message."""

    mentions: list[ScoredProduct]
    matched: bool


def select_products(
    message: str,
    candidates: Sequence[Product],
    *,
    limit: int,
    fallback_limit: int,
) -> ProductSelection:
    ranked = rank_products(message, candidates)
    if ranked:
        return ProductSelection(mentions=ranked[:limit], matched=True)
    fallback = [
        ScoredProduct(product=product, score=0)
        for product in list(candidates)[:fallback_limit]
    ]
    return ProductSelection(mentions=fallback, matched=False)


def default_reply(message: str, selection: ProductSelection) -> str:
    if not selection.mentions:
        return (
            "We don't have any products available right now. "
            f"Please reach out to {settings.SUPPORT_CONTACT} for assistance."
        )
    names = ", ".join(
        f"{entry.product.name} (${entry.product.price:.2f})"
        for entry in selection.mentions
    )
    if selection.matched:
        return (
            f"Here are some products related to '{message.strip()}': {names}. "
            "Let me know if you need more details."
        )
    return (
        f"Sorry, we couldn't find a product matching '{message.strip()}'. "
        f"You might like: {names}."
    )


class ShoppingAssistant:
    """Answers a chat message using a fresh snapshot of the active catalog."""

    def __init__(
        self,
        products: ProductCollection,
        decoder: DecoderClient | None,
    ) -> None:
        self._products = products
        self._decoder = decoder

    async def answer(self, payload: ChatRequest) -> ChatResponse:
        candidates = await self._products.find_all_active()
        selection = select_products(
            payload.message,
            candidates,
            limit=settings.CHAT_MAX_PRODUCTS,
            fallback_limit=settings.CHAT_FALLBACK_PRODUCTS,
        )
        logger.info(
            "Chat products selected",
            extra={
                "candidates": len(candidates),
                "mentioned": len(selection.mentions),
                "matched": selection.matched,
            },
        )

        reply = await self._generate_reply(payload, selection, len(candidates))
        return ChatResponse(
            response=reply,
            products=[
                ChatProductMention(
                    id=entry.product.id,
                    name=entry.product.name,
                    price=entry.product.price,
                    score=entry.score,
                )
                for entry in selection.mentions
            ],
        )

    async def _generate_reply(
        self,
        payload: ChatRequest,
        selection: ProductSelection,
        total_active: int,
    ) -> str:
        if self._decoder is None:
            return default_reply(payload.message, selection)

        product_context = build_product_context(
            payload.message,
            selection.mentions,
            matched=selection.matched,
            total_active=total_active,
        )
        system_prompt = build_system_prompt(payload.context, product_context)
        try:
            reply = await self._decoder.decode(payload.message, system=system_prompt)
            if reply and reply.strip():
                return reply.strip()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Decoder error, falling back to template: %s", exc)
        return default_reply(payload.message, selection)
