"""Product collection backing the storefront catalog and the chat assistant."""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Callable
from datetime import UTC, datetime
from operator import attrgetter
from typing import Annotated, Any

import redis.asyncio as redis
from fastapi import Depends

from storefront.models.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    SortDirection,
    SortField,
)
from storefront.services.storage.document_store import (
    RedisDocumentStore,
    get_redis_client,
)

logger = logging.getLogger(__name__)

_SKU_ALPHABET = string.digits + string.ascii_uppercase
_SKU_SUFFIX_LENGTH = 6

_SORT_KEYS: dict[SortField, Callable[[Product], Any]] = {
    SortField.CREATED_AT: attrgetter("created_at"),
    SortField.PRICE: attrgetter("price"),
    SortField.NAME: attrgetter("name"),
}


def generate_sku(category: str) -> str:
    """Category prefix plus a random base-36 suffix, e.g. ``LAP-4K2Z9Q``."""
    prefix = category.strip()[:3].upper()
    suffix = "".join(secrets.choice(_SKU_ALPHABET) for _ in range(_SKU_SUFFIX_LENGTH))
    return f"{prefix}-{suffix}"


class ProductCollection:
    """Queryable product collection stored in Redis."""

    def __init__(self, store: RedisDocumentStore[Product]) -> None:
        self._store = store

    async def find_matching(
        self,
        predicate: Callable[[Product], bool],
        sort_by: SortField,
        sort_order: SortDirection,
        skip: int,
        limit: int,
    ) -> tuple[list[Product], int]:
        """Filter, sort and slice the collection; ties keep insertion order."""

        matches = await self._store.find(predicate)
        matches.sort(
            key=_SORT_KEYS[SortField(sort_by)],
            reverse=SortDirection(sort_order) is SortDirection.DESC,
        )
        return matches[skip : skip + limit], len(matches)

    async def find_all_active(self) -> list[Product]:
        return await self._store.find(lambda product: product.is_active)

    async def get(self, product_id: str) -> Product | None:
        return await self._store.get(product_id)

    async def create(
        self,
        payload: ProductCreate,
        *,
        created_by: str | None = None,
    ) -> Product:
        product = Product(
            **payload.model_dump(mode="json", exclude={"sku"}),
            created_by=created_by,
        )
        if payload.sku:
            await self._store.claim("sku", payload.sku, product.id)
            sku = payload.sku
        else:
            sku = await self._claim_generated_sku(payload.category, product.id)
        product = product.model_copy(update={"sku": sku})
        try:
            await self._store.insert(product)
        except Exception:
            await self._store.release("sku", sku)
            raise
        logger.info(
            "Created product %s (sku=%s, category=%s)",
            product.id,
            product.sku,
            product.category,
        )
        return product

    async def update(self, product_id: str, changes: ProductUpdate) -> Product:
        product = await self._store.require(product_id)
        data = product.model_dump(mode="json")
        data.update(
            changes.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        )
        data["updated_at"] = datetime.now(UTC)
        updated = Product.model_validate(data)
        await self._store.replace(updated)
        logger.info("Updated product %s", product_id)
        return updated

    async def delete(self, product_id: str) -> Product:
        product = await self._store.delete(product_id)
        if product.sku:
            await self._store.release("sku", product.sku)
        logger.info("Deleted product %s", product_id)
        return product

    async def _claim_generated_sku(self, category: str, product_id: str) -> str:
        sku = generate_sku(category)
        while not await self._store.try_claim("sku", sku, product_id):
            sku = generate_sku(category)
        return sku


def get_product_collection(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> ProductCollection:
    """FastAPI dependency factory."""

    return ProductCollection(RedisDocumentStore(client, "products", Product))


ProductCollectionDependency = Annotated[
    ProductCollection,
    Depends(get_product_collection),
]
