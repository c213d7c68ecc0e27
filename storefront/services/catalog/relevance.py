"""Keyword relevance scoring used to pick products for assistant replies.

Signals are additive and unnormalised. A product can collect several of them
for the same utterance; products that collect none are dropped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from storefront.errors import InvalidQueryError
from storefront.models.product import Product, ScoredProduct

FULL_NAME_SCORE = 100
NAME_TOKEN_SCORE = 50
CATEGORY_SCORE = 30
TAG_SCORE = 20
DESCRIPTION_TOKEN_SCORE = 10
PRICE_PROXIMITY_SCORE = 15
IN_STOCK_SCORE = 5

PRICE_TOLERANCE = 50
MIN_TOKEN_LENGTH = 3

_PRICE_PATTERN = re.compile(
    r"(?<![\d.,])((?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?)\s*(?:dollars|dollar|usd|\$)"
)
_STOCK_KEYWORDS = ("available", "stock", "in stock")


@dataclass(frozen=True)
class Utterance:
    """Normalised form of what the customer typed."""

    text: str
    tokens: tuple[str, ...]
    price_hint: float | None
    asks_stock: bool


def normalize_utterance(utterance: str) -> Utterance:
    if not isinstance(utterance, str):
        raise InvalidQueryError("utterance must be a string")
    text = utterance.lower()
    tokens = tuple(
        token for token in text.split() if len(token) >= MIN_TOKEN_LENGTH
    )
    match = _PRICE_PATTERN.search(text)
    return Utterance(
        text=text,
        tokens=tokens,
        price_hint=float(match.group(1).replace(",", "")) if match else None,
        asks_stock=any(keyword in text for keyword in _STOCK_KEYWORDS),
    )


def score_product(product: Product, utterance: Utterance) -> int:
    """Sum every signal ``product`` triggers for ``utterance``."""
    text = utterance.text
    name = product.name.lower()
    score = 0

    if name and name in text:
        score += FULL_NAME_SCORE
    if any(token in name for token in utterance.tokens):
        score += NAME_TOKEN_SCORE

    category = product.category.lower()
    if category and category in text:
        score += CATEGORY_SCORE

    for tag in product.tags:
        tag = tag.lower()
        if tag and tag in text:
            score += TAG_SCORE

    description_words = set(product.description.lower().split())
    score += DESCRIPTION_TOKEN_SCORE * sum(
        1 for token in utterance.tokens if token in description_words
    )

    if (
        utterance.price_hint is not None
        and abs(product.price - utterance.price_hint) <= PRICE_TOLERANCE
    ):
        score += PRICE_PROXIMITY_SCORE

    if utterance.asks_stock and product.stock_quantity > 0:
        score += IN_STOCK_SCORE

    return score


def rank_products(
    utterance: str,
    candidates: Sequence[Product] | Iterable[Product],
) -> list[ScoredProduct]:
    """Score ``candidates`` against ``utterance`` and order them best first.

    Ties keep their candidate order. No truncation happens here; callers
    keep as many of the leading entries as they need.
    """
    if candidates is None or isinstance(candidates, str | bytes):
        raise InvalidQueryError("candidates must be a sequence of products")
    try:
        pool = list(candidates)
    except TypeError as exc:
        raise InvalidQueryError("candidates must be a sequence of products") from exc

    normalized = normalize_utterance(utterance)
    if not normalized.tokens:
        return []

    scored: list[ScoredProduct] = []
    for product in pool:
        if not isinstance(product, Product):
            raise InvalidQueryError(
                f"candidates must be products, got {type(product).__name__}"
            )
        score = score_product(product, normalized)
        if score > 0:
            scored.append(ScoredProduct(product=product, score=score))

    scored.sort(key=lambda entry: entry.score, reverse=True)
    return scored
