"""Shared test fixtures."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from fintrack.api.deps import (
    get_investment_store,
    get_market_data,
    get_session_store,
    get_transaction_service,
)
from fintrack.config import settings
from fintrack.main import app
from fintrack.services.market_data_service import MarketDataService

DEMO_CREDENTIALS = {"username": "demo", "password": "Demo123!"}


def _rate_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"date": "2026-04-01", "usd": {"try": 27}})


@pytest.fixture(autouse=True)
def fresh_stores():
    """Fresh in-memory stores and a fixed 27.0 USD/TRY rate for every test."""
    get_session_store.cache_clear()
    get_transaction_service.cache_clear()
    get_investment_store.cache_clear()
    market = MarketDataService(
        settings,
        client=httpx.AsyncClient(transport=httpx.MockTransport(_rate_handler)),
    )
    app.dependency_overrides[get_market_data] = lambda: market
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    """Async test client for the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def demo_client(client):
    """Test client carrying the demo user's session cookies."""
    response = await client.post("/api/v1/auth/login", json=DEMO_CREDENTIALS)
    assert response.status_code == 200
    return client
