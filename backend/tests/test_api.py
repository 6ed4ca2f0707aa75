"""End-to-end tests against the in-memory API."""

import datetime as dt
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from fintrack.config import settings
from fintrack.core.exceptions import RequestFailed, ValidationError
from fintrack.main import app
from fintrack.schemas.investment import InvestmentForm
from fintrack.schemas.transaction import TransactionForm, TransactionUpdate
from fintrack.services.api_client import FinTrackApi
from fintrack.services.auth_service import AuthClient, AuthSession
from fintrack.services.investment_service import build_update_request


@pytest.fixture
async def api():
    """Typed client signed in as the demo user."""
    http = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    async with AuthClient(settings, AuthSession(), http) as auth:
        await auth.login("demo", "Demo123!")
        yield FinTrackApi(auth)


# ── Raw HTTP ──────────────────────────────────────


@pytest.mark.asyncio
async def test_requests_without_session_get_error_envelope(client):
    response = await client.get("/api/v1/dashboard/overview?month=3&year=2026")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid or expired token"
    assert body["path"] == "/api/v1/dashboard/overview"


@pytest.mark.asyncio
async def test_login_with_wrong_password(client):
    response = await client.post("/api/v1/auth/login", json={"username": "demo", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid username or password"


@pytest.mark.asyncio
async def test_list_transactions_for_month(demo_client):
    response = await demo_client.get("/api/v1/transactions", params={"month": 3, "year": 2026})
    assert response.status_code == 200
    page = response.json()["data"]

    assert page["totalElements"] == 6
    assert page["content"][0]["id"] == "utilities-2026-03"
    assert page["content"][0]["amountTry"] == "1250"
    assert page["content"][4]["title"] == "Phone Installment (1/9)"


@pytest.mark.asyncio
async def test_list_transactions_unexpanded(demo_client):
    response = await demo_client.get("/api/v1/transactions", params={"expanded": "false", "size": 100})
    rows = response.json()["data"]["content"]
    assert len(rows) == 20
    assert any(r.get("isInstallment") for r in rows)


@pytest.mark.asyncio
async def test_register_validation_error(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": "ayse", "email": "ayse@example.com", "password": "abc", "netSalaryUsd": 1500},
    )
    assert response.status_code == 422
    assert response.json()["error"].startswith("Password must be at least 8 characters")


@pytest.mark.asyncio
async def test_installment_without_meta_is_rejected(demo_client):
    response = await demo_client.post(
        "/api/v1/transactions",
        json={
            "title": "Phone",
            "amountTry": "1000",
            "date": "2026-03-05",
            "category": "Installment",
            "type": "expense",
            "isInstallment": True,
        },
    )
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "installment transactions require installmentMeta"


@pytest.mark.asyncio
async def test_refresh_rotates_cookies(demo_client):
    old = demo_client.cookies.get("access_token")
    response = await demo_client.post("/api/v1/auth/refresh")
    assert response.status_code == 204
    assert demo_client.cookies.get("access_token") != old

    response = await demo_client.get("/api/v1/budgets")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_logout_ends_session(demo_client):
    response = await demo_client.post("/api/v1/auth/logout")
    assert response.status_code == 204
    response = await demo_client.get("/api/v1/transactions")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_budget_report(demo_client):
    response = await demo_client.get("/api/v1/budgets/report")
    report = response.json()["data"]

    assert report["totals"]["incomeTry"] == "160650.00"
    assert report["topCategory"]["categoryId"] == "HOUSING"
    assert report["worstExpenseMonth"]["month"] == "2026-03"


@pytest.mark.asyncio
async def test_overview_year_must_leave_room_for_forecast(demo_client):
    response = await demo_client.get("/api/v1/dashboard/overview", params={"month": 12, "year": 9999})
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert "9996" in body["error"]

    response = await demo_client.get("/api/v1/dashboard/overview", params={"month": 12, "year": 9996})
    assert response.status_code == 200
    assert response.json()["data"]["forecast"][-1]["month"] == "9997-03"


@pytest.mark.asyncio
async def test_report_range_must_be_ordered(demo_client):
    response = await demo_client.get(
        "/api/v1/reports/summary", params={"startDate": "2026-05-01", "endDate": "2026-03-01"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "Start date must be before end date."


# ── Typed client ──────────────────────────────────


@pytest.mark.asyncio
async def test_dashboard_overview(api):
    overview = await api.dashboard_overview(month=4, year=2026, size=5)

    assert overview.summary.income == Decimal("32130")
    assert overview.summary.expense == Decimal("17800")
    assert overview.summary.credit_card_limit == Decimal("41850")
    assert overview.recent_transactions.total_elements == 6
    assert len(overview.recent_transactions.content) == 5
    assert [f.label for f in overview.forecast][3] == "APR"
    assert {w.category: w.alert_level for w in overview.category_watchlist}["Housing"] == "warning"


@pytest.mark.asyncio
async def test_report_summary(api):
    report = await api.report_summary(dt.date(2026, 3, 1), dt.date(2026, 4, 30))

    assert report.totals.expense_try == Decimal("54350")
    assert report.top_category.category_id == "DEBT"
    assert report.metadata.data_points.transactions == 12


@pytest.mark.asyncio
async def test_report_summary_checks_range_locally(api):
    with pytest.raises(ValidationError, match="Start date must be before end date."):
        await api.report_summary(dt.date(2026, 4, 1), dt.date(2026, 3, 1))


@pytest.mark.asyncio
async def test_transaction_lifecycle(api):
    form = TransactionForm(
        title="Laptop",
        amount_try="24000",
        date=dt.date(2026, 6, 14),
        category="Installment",
        is_installment=True,
        installment_months="12",
    )
    created = await api.create_transaction(form.to_create())
    assert created.id.startswith("custom-")
    assert created.is_installment

    june = await api.list_transactions(month=6, year=2026)
    laptop = [t for t in june.content if t.title.startswith("Laptop")]
    assert [t.amount_try for t in laptop] == [Decimal("2000.00")]
    assert laptop[0].date == dt.date(2026, 6, 5)

    updated = await api.update_transaction(created.id, TransactionUpdate(title="Work laptop"))
    assert updated.title == "Work laptop"
    assert updated.amount_try == Decimal("24000")

    await api.delete_transaction(created.id)
    with pytest.raises(RequestFailed, match="Transaction not found"):
        await api.delete_transaction(created.id)


@pytest.mark.asyncio
async def test_metadata_and_market_data(api):
    categories = await api.categories()
    markets = await api.stock_markets()
    assets = await api.supported_assets()

    assert categories[0].id == "HOUSING"
    assert {m.id for m in markets} >= {"BIST", "NASDAQ"}
    assert assets["CURRENCY"][0].slug == "USD"
    assert await api.usd_try_rate() == Decimal("27")


@pytest.mark.asyncio
async def test_investment_lifecycle(api):
    created = await api.create_investment(
        InvestmentForm(asset_type="STOCK", stock_market="BIST", symbol="asels", quantity="5", avg_cost="60")
        .to_create(requires_market=True)
    )
    assert created.symbol == "ASELS"
    assert created.profit_loss_try == 0

    update = build_update_request(created, InvestmentForm(symbol="ASELS", quantity="10", avg_cost="55"))
    updated = await api.update_investment(created.id, update)
    assert updated.quantity == Decimal("10")
    assert updated.avg_cost_try == Decimal("55")
    assert updated.profit_loss_try == Decimal("50")

    await api.delete_investment(created.id)
    symbols = [a.symbol for a in await api.investments()]
    assert symbols == ["GRAM", "THYAO"]
