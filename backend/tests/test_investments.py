"""Portfolio maths and market data tests."""

from decimal import Decimal

import httpx
import pytest

from fintrack.config import settings
from fintrack.core.exceptions import ValidationError
from fintrack.schemas.investment import InvestmentAsset, InvestmentForm
from fintrack.services.investment_service import (
    allocation,
    build_update_request,
    portfolio_summary,
    reprice,
)
from fintrack.services.market_data_service import MarketDataService
from fintrack.services.seed_data import demo_investments


def _asset(**overrides) -> InvestmentAsset:
    fields = {
        "id": "inv-aapl",
        "symbol": "AAPL",
        "name": "Apple",
        "quantity": Decimal("10"),
        "avg_cost_try": Decimal("100"),
        "current_price_try": Decimal("100"),
    }
    fields.update(overrides)
    return InvestmentAsset(**fields)


def test_seed_profit_loss_follows_price():
    gram, thyao = demo_investments()

    assert gram.current_price_try == Decimal("2612.40")
    assert gram.profit_loss_try == Decimal("1948.80")
    assert thyao.profit_loss_try == Decimal("650.00")


def test_reprice_recomputes_profit_loss():
    (asset,) = reprice([_asset()], {"AAPL": Decimal("90")})
    assert asset.current_price_try == Decimal("90")
    assert asset.profit_loss_try == Decimal("-100")


def test_reprice_leaves_unquoted_assets():
    original = _asset(profit_loss_try=Decimal("5"))
    assert reprice([original], {"MSFT": Decimal("1")}) == [original]


def test_portfolio_summary():
    summary = portfolio_summary(demo_investments())

    assert summary.total_invested_try == Decimal("40020.00")
    assert summary.total_current_value_try == Decimal("42618.80")
    assert summary.total_profit_loss_try == Decimal("2598.80")
    assert summary.total_profit_loss_pct == Decimal("6.49")


def test_empty_portfolio_summary():
    summary = portfolio_summary([])
    assert summary.total_invested_try == 0
    assert summary.total_profit_loss_pct == 0


def test_allocation_by_market_value():
    slices = allocation(demo_investments())
    assert [(s.symbol, s.value_try) for s in slices] == [
        ("GRAM", Decimal("31348.80")),
        ("THYAO", Decimal("11270.00")),
    ]


def test_update_request_in_try():
    form = InvestmentForm(symbol="AAPL", quantity="4", avg_cost="120")
    update = build_update_request(_asset(), form)

    assert update.quantity == Decimal("4")
    assert update.total_cost_try == Decimal("480")
    assert update.avg_cost_original == Decimal("120")
    assert update.purchase_currency == "TRY"


def test_update_request_converts_with_implied_rate():
    asset = _asset(
        original_currency="USD",
        avg_cost_original=Decimal("4"),
        avg_cost_try=Decimal("108"),
    )
    form = InvestmentForm(symbol="AAPL", quantity="2", avg_cost="5")
    update = build_update_request(asset, form)

    assert update.total_cost_try == Decimal("270")
    assert update.purchase_currency == "USD"


def test_update_request_needs_an_id():
    form = InvestmentForm(symbol="AAPL", quantity="1", avg_cost="1")
    with pytest.raises(ValidationError, match="Unable to update asset without an id."):
        build_update_request(_asset(id=None), form)


@pytest.mark.asyncio
async def test_usd_try_rate_is_cached():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={"usd": {"try": 32.5}})

    service = MarketDataService(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    assert await service.usd_try_rate() == Decimal("32.5")
    assert await service.usd_try_rate() == Decimal("32.5")
    assert calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="down"),
        httpx.Response(200, json={"usd": {}}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_usd_try_rate_falls_back(response):
    service = MarketDataService(
        settings,
        client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: response)),
    )
    assert await service.usd_try_rate() == Decimal("27.0")


@pytest.mark.asyncio
async def test_usd_try_rate_falls_back_when_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    service = MarketDataService(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    assert await service.usd_try_rate() == settings.usd_try_fallback_rate


def test_update_request_rejects_overflowing_total():
    form = InvestmentForm(symbol="AAPL", quantity="1e21", avg_cost="1e21")
    with pytest.raises(ValidationError, match="Please fill all fields with valid values."):
        build_update_request(_asset(), form)
