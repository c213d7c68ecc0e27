"""Pytest configuration and fixtures for the storefront service."""

import asyncio
from datetime import UTC, datetime, timedelta

import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.models.product import Product
from storefront.services.clients.decoder_client import get_decoder_client
from storefront.services.storage.document_store import (
    RedisDocumentStore,
    get_redis_client,
)
from storefront.services.storage.product_collection import ProductCollection

_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_product(**overrides) -> Product:
    """Build a valid product; ``minutes`` offsets ``created_at`` for ordering."""
    minutes = overrides.pop("minutes", 0)
    fields = {
        "name": "Generic Widget",
        "price": 10.0,
        "description": "A perfectly ordinary widget for everyday use.",
        "category": "gadgets",
        "tags": [],
        "stock_quantity": 1,
        "created_at": _BASE_TIME + timedelta(minutes=minutes),
    }
    fields.update(overrides)
    return Product(**fields)


class StubDecoder:
    """Decoder double that echoes the user prompt and remembers the system prompt."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    async def decode(self, prompt: str, *, system: str | None = None) -> str:
        await asyncio.sleep(0)
        self.calls.append((prompt, system))
        return f"decoded::{prompt}"


@pytest.fixture(autouse=True)
def decoder_stub():
    """Provide a stub decoder so tests do not call external services."""
    from storefront.main import app

    stub = StubDecoder()
    app.dependency_overrides[get_decoder_client] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_decoder_client, None)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    from storefront.main import app

    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    app.dependency_overrides[get_redis_client] = lambda: client
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()
        app.dependency_overrides.pop(get_redis_client, None)


@pytest_asyncio.fixture()
async def product_store(redis_client):
    return RedisDocumentStore(redis_client, "products", Product)


@pytest_asyncio.fixture()
async def product_collection(product_store):
    return ProductCollection(product_store)


@pytest_asyncio.fixture()
async def client(redis_client):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from storefront.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client


@pytest.fixture()
def product_factory():
    """Expose :func:`make_product` to tests."""
    return make_product
