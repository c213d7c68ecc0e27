"""Product domain models and API schemas."""

from __future__ import annotations

import math
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


def _split_tags(value: Any) -> Any:
    """Accept tags either as a list or as a comma-separated string."""
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, list):
        return [tag.strip() if isinstance(tag, str) else tag for tag in value]
    return value


class SortField(str, Enum):
    """Fields the storefront listing can be ordered by."""

    CREATED_AT = "createdAt"
    PRICE = "price"
    NAME = "name"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProductRules(BaseModel):
    """Normalisation and checks applied wherever product fields are written."""

    @field_validator(
        "name", "description", "category", mode="before", check_fields=False
    )
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        return _split_tags(value)

    @field_validator("tags", check_fields=False)
    @classmethod
    def _reject_empty_tags(cls, value: list[str] | None) -> list[str] | None:
        if value and any(not tag for tag in value):
            raise ValueError("Tag cannot be empty")
        return value

    @field_validator("price", check_fields=False)
    @classmethod
    def _round_price(cls, value: float | None) -> float | None:
        return round(value, 2) if value is not None else value

    @field_validator("sku", check_fields=False)
    @classmethod
    def _upper_sku(cls, value: str | None) -> str | None:
        return value.strip().upper() if value else value


class ProductFields(ProductRules):
    """Editable product attributes shared by create payloads and stored products."""

    name: str = Field(..., min_length=2, max_length=100)
    price: float = Field(..., ge=0, description="Price in currency units")
    description: str = Field(..., min_length=10, max_length=1000)
    category: str = Field(..., min_length=2, max_length=50)
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    stock_quantity: int = Field(0, ge=0)
    image: AnyHttpUrl | None = None
    sku: str | None = Field(None, min_length=1, max_length=64)


class ProductCreate(ProductFields):
    """Payload accepted by POST /products."""


class ProductUpdate(ProductRules):
    """Partial payload accepted by PUT /products/{id}."""

    name: str | None = Field(None, min_length=2, max_length=100)
    price: float | None = Field(None, ge=0)
    description: str | None = Field(None, min_length=10, max_length=1000)
    category: str | None = Field(None, min_length=2, max_length=50)
    tags: list[str] | None = None
    featured: bool | None = None
    stock_quantity: int | None = Field(None, ge=0)
    image: AnyHttpUrl | None = None
    is_active: bool | None = None


class Product(ProductFields):
    """Stored product document."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    is_active: bool = True
    created_by: str | None = Field(
        None,
        description="Identifier of the admin who created the product",
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ProductSummary(BaseModel):
    """Read projection returned by listing endpoints."""

    id: str
    name: str
    price: float
    description: str
    category: str
    tags: list[str]
    featured: bool
    stock_quantity: int
    image: AnyHttpUrl | None = None
    sku: str | None = None
    created_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> ProductSummary:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            description=product.description,
            category=product.category,
            tags=list(product.tags),
            featured=product.featured,
            stock_quantity=product.stock_quantity,
            image=product.image,
            sku=product.sku,
            created_at=product.created_at,
        )


class FilterCriteria(BaseModel):
    """Structured catalog query; every filter is optional."""

    query: str | None = None
    category: str | None = None
    featured: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortDirection = SortDirection.DESC
    page: int = 1
    page_size: int | None = None


class Pagination(BaseModel):
    """Pager metadata; page counts and neighbours are derived from the totals."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @computed_field(alias="hasNext")
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @computed_field(alias="hasPrev")
    @property
    def has_prev(self) -> bool:
        return self.page > 1


class ResultPage(BaseModel):
    """A page of product summaries plus pager metadata."""

    items: list[ProductSummary] = Field(default_factory=list)
    pagination: Pagination


class ScoredProduct(BaseModel):
    """A product paired with its relevance score for one utterance."""

    product: Product
    score: int = Field(..., ge=0)


class ProductResponse(BaseModel):
    product: Product


class ProductMutationResponse(BaseModel):
    message: str
    product: Product | None = None
