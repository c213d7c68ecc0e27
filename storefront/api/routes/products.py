"""Storefront catalog routes: browse, search and product maintenance."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import ValidationError

from storefront.config import settings
from storefront.errors import DocumentNotFoundError, DuplicateDocumentError
from storefront.models.product import (
    ProductCreate,
    ProductMutationResponse,
    ProductResponse,
    ProductUpdate,
    ResultPage,
)
from storefront.services.catalog.query_engine import criteria_from_params, query_catalog
from storefront.services.storage.product_collection import ProductCollectionDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

# Raw strings on purpose: bad values degrade to defaults instead of a 422.
OptionalParam = Annotated[str | None, Query()]


@router.get(
    "",
    response_model=ResultPage,
    summary="Browse and search active products",
)
async def list_products(
    products: ProductCollectionDependency,
    query: OptionalParam = None,
    category: OptionalParam = None,
    featured: OptionalParam = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
    page: OptionalParam = None,
    limit: OptionalParam = None,
) -> ResultPage:
    criteria = criteria_from_params(
        query=query,
        category=category,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return await query_catalog(
        products,
        criteria,
        default_page_size=settings.STOREFRONT_PAGE_SIZE,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Fetch a single product",
)
async def get_product(
    product_id: str,
    products: ProductCollectionDependency,
) -> ProductResponse:
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse(product=product)


@router.post(
    "",
    response_model=ProductMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    products: ProductCollectionDependency,
    admin_id: Annotated[str | None, Header(alias="X-Admin-Id")] = None,
) -> ProductMutationResponse:
    try:
        product = await products.create(payload, created_by=admin_id)
    except DuplicateDocumentError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ProductMutationResponse(message="Product created successfully", product=product)


@router.put(
    "/{product_id}",
    response_model=ProductMutationResponse,
    summary="Update a product",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    products: ProductCollectionDependency,
) -> ProductMutationResponse:
    try:
        product = await products.update(product_id, payload)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Product not found") from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(
                include_url=False, include_context=False, include_input=False
            ),
        ) from exc
    return ProductMutationResponse(message="Product updated successfully", product=product)


@router.delete(
    "/{product_id}",
    response_model=ProductMutationResponse,
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    products: ProductCollectionDependency,
) -> ProductMutationResponse:
    try:
        await products.delete(product_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Product not found") from exc
    return ProductMutationResponse(message="Product deleted successfully")
