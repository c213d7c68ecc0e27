"""Translate storefront filter criteria into a deterministic page of products."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from storefront.config import settings
from storefront.errors import InvalidQueryError
from storefront.models.product import (
    FilterCriteria,
    Pagination,
    Product,
    ProductSummary,
    ResultPage,
    SortDirection,
    SortField,
)
from storefront.services.catalog.pagination import (
    coerce_bool,
    coerce_float,
    normalize_page,
    normalize_page_size,
    page_window,
)

logger = logging.getLogger(__name__)


class ProductSource(Protocol):
    """Collection capability the engine delegates scanning and slicing to."""

    async def find_matching(
        self,
        predicate: ProductPredicate,
        sort_by: SortField,
        sort_order: SortDirection,
        skip: int,
        limit: int,
    ) -> tuple[list[Product], int]: ...


@dataclass(frozen=True)
class ProductPredicate:
    """Conjunctive filter over products; ``None`` fields do not constrain."""

    query: str | None = None
    category: str | None = None
    featured: bool | None = None
    min_price: float | None = None
    max_price: float | None = None

    def __call__(self, product: Product) -> bool:
        if not product.is_active:
            return False
        if self.category and self.category not in product.category.lower():
            return False
        if self.featured and not product.featured:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.query:
            return (
                self.query in product.name.lower()
                or self.query in product.description.lower()
                or any(self.query in tag.lower() for tag in product.tags)
            )
        return True


def build_predicate(criteria: FilterCriteria) -> ProductPredicate:
    """Lower-case the text filters once so matching is case-insensitive."""
    query = (criteria.query or "").strip().lower() or None
    category = (criteria.category or "").strip().lower() or None
    return ProductPredicate(
        query=query,
        category=category,
        featured=True if criteria.featured else None,
        min_price=criteria.min_price,
        max_price=criteria.max_price,
    )


def criteria_from_params(
    *,
    query: Any = None,
    category: Any = None,
    featured: Any = None,
    min_price: Any = None,
    max_price: Any = None,
    sort_by: Any = None,
    sort_order: Any = None,
    page: Any = None,
    limit: Any = None,
) -> FilterCriteria:
    """Build criteria from raw query-string values without ever failing."""
    try:
        sort_field = SortField(sort_by) if sort_by else SortField.CREATED_AT
    except ValueError:
        sort_field = SortField.CREATED_AT
    direction = (
        SortDirection.ASC
        if str(sort_order or "").strip().lower() == SortDirection.ASC.value
        else SortDirection.DESC
    )
    return FilterCriteria(
        query=str(query) if query else None,
        category=str(category) if category else None,
        featured=coerce_bool(featured),
        min_price=coerce_float(min_price),
        max_price=coerce_float(max_price),
        sort_by=sort_field,
        sort_order=direction,
        page=normalize_page(page),
        page_size=normalize_page_size(
            limit,
            settings.STOREFRONT_PAGE_SIZE,
            settings.MAX_PAGE_SIZE,
        )
        if limit is not None
        else None,
    )


async def query_catalog(
    source: ProductSource,
    criteria: FilterCriteria,
    *,
    default_page_size: int | None = None,
) -> ResultPage:
    """Return one page of active products matching ``criteria``.

    Page and page size are normalised rather than rejected; a page beyond the
    last one yields no items but still reports the real totals.
    """
    if not isinstance(criteria, FilterCriteria):
        raise InvalidQueryError("criteria must be a FilterCriteria instance")

    page = normalize_page(criteria.page)
    page_size = normalize_page_size(
        criteria.page_size,
        default_page_size or settings.STOREFRONT_PAGE_SIZE,
        settings.MAX_PAGE_SIZE,
    )
    skip, limit = page_window(page, page_size)

    items, total = await source.find_matching(
        build_predicate(criteria),
        criteria.sort_by,
        criteria.sort_order,
        skip,
        limit,
    )
    logger.debug(
        "Catalog query served",
        extra={"page": page, "page_size": page_size, "total": total},
    )
    return ResultPage(
        items=[ProductSummary.from_product(product) for product in items],
        pagination=Pagination(page=page, limit=page_size, total=total),
    )
