"""Prompt construction for the shopping assistant."""

from __future__ import annotations

from collections.abc import Sequence

from storefront.config import settings
from storefront.models.product import Product, ScoredProduct


def format_product_line(product: Product) -> str:
    sku = product.sku or "n/a"
    return (
        f"- {product.name}: ${product.price:.2f} "
        f"({product.category}, Stock: {product.stock_quantity}, SKU: {sku})"
    )


def build_product_context(
    message: str,
    mentions: Sequence[ScoredProduct],
    *,
    matched: bool,
    total_active: int,
) -> str:
    if not mentions:
        return "\n\nNo products are currently available in the catalog."
    if matched:
        header = f'\n\nUser is asking about: "{message.strip()}"\nRelevant products found:\n'
    else:
        header = (
            f'\n\nUser is asking about: "{message.strip()}"\n'
            "No exact product found with that name. Here are some of our available products:\n"
        )
    lines = "\n".join(format_product_line(entry.product) for entry in mentions)
    return f"{header}{lines}\n\nTotal Products: {total_active}"


def build_system_prompt(context: str | None, product_context: str) -> str:
    store_context = (context or "").strip() or settings.STORE_CONTEXT
    return f"""You are a helpful customer service assistant for an online store.

Context: {store_context}

Your role:
- Help customers with product inquiries
- Provide information about features, pricing, and availability using the current product data
- When customers ask about specific products, use the product list below and give detailed information
- If no exact match is found, state that the product is not available and mention similar products from the list
- Do not invent products, prices or stock levels that are not in the list
- Be friendly, professional, and concise
- For order-specific or technical issues, direct customers to {settings.SUPPORT_CONTACT}

Keep responses helpful but brief (under 150 words when possible).
{product_context}"""
