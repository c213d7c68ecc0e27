"""Tests for the keyword relevance scorer."""

from __future__ import annotations

import pytest

from storefront.errors import InvalidQueryError
from storefront.services.catalog.relevance import (
    normalize_utterance,
    rank_products,
    score_product,
)

pytestmark = pytest.mark.unit


def _names(ranked):
    return [entry.product.name for entry in ranked]


def test_exact_name_and_stock_keyword(product_factory):
    iphone = product_factory(
        name="iPhone 14",
        price=999,
        category="smartphones",
        tags=["featured"],
        stock_quantity=5,
        description="Apple flagship phone with a great camera.",
    )
    galaxy = product_factory(
        name="Galaxy S22",
        price=950,
        category="smartphones",
        tags=[],
        stock_quantity=0,
        description="Samsung flagship phone with a bright display.",
    )

    ranked = rank_products("do you have the iphone 14 in stock", [iphone, galaxy])

    assert _names(ranked) == ["iPhone 14"]
    assert ranked[0].score >= 105


def test_full_name_scores_name_and_token_signals(product_factory):
    lamp = product_factory(name="Desk Lamp", description="Bright adjustable light.")

    utterance = normalize_utterance("looking for a desk lamp")

    # full name (+100) and at least one token inside the name (+50)
    assert score_product(lamp, utterance) == 150


def test_price_proximity_is_inclusive_fifty(product_factory):
    products = [
        product_factory(name=f"Item {price}", price=price, category="misc", stock_quantity=0)
        for price in (10, 49, 51, 100, 101)
    ]

    ranked = rank_products("anything under 50 dollars", products)

    assert sorted(entry.product.price for entry in ranked) == [10, 49, 51, 100]
    assert all(entry.score == 15 for entry in ranked)


@pytest.mark.parametrize("marker", ["dollar", "USD", "$"])
def test_price_markers(product_factory, marker):
    product = product_factory(name="Cable Kit", price=30, category="misc", stock_quantity=0)

    ranked = rank_products(f"something around 20 {marker} please", [product])

    assert [entry.score for entry in ranked] == [15]


def test_price_without_marker_is_ignored(product_factory):
    product = product_factory(name="Cable Kit", price=30, category="misc", stock_quantity=0)

    assert rank_products("something around 20 please", [product]) == []


def test_price_with_thousands_separator(product_factory):
    monitor = product_factory(name="Wide Monitor", price=990, category="misc", stock_quantity=0)
    cable = product_factory(name="Cable Kit", price=10, category="misc", stock_quantity=0)

    assert normalize_utterance("around 1,000 dollars").price_hint == 1000
    assert normalize_utterance("about 2,499.50 usd").price_hint == 2499.5
    assert _names(rank_products("around 1,000 dollars", [monitor, cable])) == ["Wide Monitor"]


def test_category_and_tag_substrings(product_factory):
    product = product_factory(
        name="Studio Monitor",
        category="audio",
        tags=["pro", "speaker"],
        description="Nearfield monitor for mixing.",
        stock_quantity=0,
    )

    utterance = normalize_utterance("professional audio gear")

    # category +30, tag "pro" inside "professional" +20
    assert score_product(product, utterance) == 50


def test_each_matching_tag_adds_score(product_factory):
    plain = product_factory(name="Plain", category="misc", tags=["wireless"], stock_quantity=0)
    tagged = product_factory(
        name="Tagged",
        category="misc",
        tags=["wireless", "bluetooth", "bluetooth"],
        stock_quantity=0,
    )

    ranked = rank_products("wireless bluetooth earbuds", [plain, tagged])

    scores = {entry.product.name: entry.score for entry in ranked}
    assert scores == {"Plain": 20, "Tagged": 60}


def test_description_tokens_score_per_token(product_factory):
    product = product_factory(
        name="Backpack",
        category="bags",
        description="Waterproof travel bag with laptop sleeve",
        stock_quantity=0,
    )

    utterance = normalize_utterance("waterproof laptop travel")

    assert score_product(product, utterance) == 30


def test_stock_keyword_requires_stock(product_factory):
    in_stock = product_factory(name="Mouse", category="misc", stock_quantity=3)
    sold_out = product_factory(name="Keyboard", category="misc", stock_quantity=0)

    ranked = rank_products("what is available", [in_stock, sold_out])

    assert _names(ranked) == ["Mouse"]
    assert ranked[0].score == 5


def test_ties_keep_candidate_order(product_factory):
    first = product_factory(name="Alpha", price=20, category="misc", stock_quantity=0)
    second = product_factory(name="Beta", price=25, category="misc", stock_quantity=0)
    best = product_factory(name="Gamma", price=22, category="misc", stock_quantity=0)

    ranked = rank_products("gamma for 20 dollars", [first, second, best])

    assert _names(ranked) == ["Gamma", "Alpha", "Beta"]
    assert ranked[1].score == ranked[2].score


def test_unrelated_products_are_excluded(product_factory):
    product = product_factory(
        name="Coffee Grinder",
        category="kitchen",
        tags=["burr"],
        description="Grinds beans evenly.",
        stock_quantity=4,
    )

    assert rank_products("gaming laptop", [product]) == []


@pytest.mark.parametrize("utterance", ["", "   ", "hi", "?? !!", "a b c 14"])
def test_utterances_without_tokens_yield_nothing(product_factory, utterance):
    product = product_factory(name="Hi", category="misc")

    assert rank_products(utterance, [product]) == []


def test_empty_candidates(product_factory):
    assert rank_products("wireless headphones", []) == []


def test_invalid_inputs_fail_fast(product_factory):
    with pytest.raises(InvalidQueryError):
        rank_products(None, [product_factory()])  # type: ignore[arg-type]
    with pytest.raises(InvalidQueryError):
        rank_products("headphones", None)  # type: ignore[arg-type]
    with pytest.raises(InvalidQueryError):
        rank_products("headphones", [{"name": "not a product"}])  # type: ignore[list-item]
