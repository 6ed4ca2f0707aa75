"""Typed client for the FinTrack REST API.

Every call goes through ``AuthClient.auth_fetch`` and unwraps the
response envelope into schema objects.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import TypeAdapter

from fintrack.core.envelope import Err, decode_envelope, parse_api_response
from fintrack.core.exceptions import RequestFailed, ValidationError
from fintrack.schemas.budget import DashboardOverview
from fintrack.schemas.common import Page
from fintrack.schemas.investment import InvestmentAsset, InvestmentCreate, InvestmentUpdate
from fintrack.schemas.metadata import CategoryMeta, ExchangeRate, StockMarketMeta, SupportedAsset
from fintrack.schemas.report import ReportSummary
from fintrack.schemas.transaction import Transaction, TransactionCreate, TransactionUpdate
from fintrack.services.auth_service import AuthClient


class FinTrackApi:
    def __init__(self, auth: AuthClient):
        self.auth = auth
        self.prefix = auth.config.api_prefix

    async def _call(
        self,
        schema: Any,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: dict | None = None,
    ) -> Any:
        response = await self.auth.auth_fetch(f"{self.prefix}{path}", method, json=json, params=params)
        return TypeAdapter(schema).validate_python(parse_api_response(response))

    async def _delete(self, path: str) -> None:
        """Deletions answer 204 or an envelope without data."""
        response = await self.auth.auth_fetch(f"{self.prefix}{path}", "DELETE")
        if not response.is_success:
            parse_api_response(response)
        if response.status_code == 204 or not response.content:
            return
        result = decode_envelope(response.json())
        if isinstance(result, Err):
            raise RequestFailed(result.message)

    # ── Transactions ──────────────────────────────────

    async def list_transactions(
        self,
        month: int | None = None,
        year: int | None = None,
        page: int = 0,
        size: int = 20,
    ) -> Page[Transaction]:
        params: dict[str, Any] = {"page": page, "size": size, "expanded": "true"}
        if month is not None:
            params["month"] = month
        if year is not None:
            params["year"] = year
        return await self._call(Page[Transaction], "/transactions", params=params)

    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        return await self._call(Transaction, "/transactions", "POST", json=data.to_wire())

    async def update_transaction(self, transaction_id: str, data: TransactionUpdate) -> Transaction:
        return await self._call(
            Transaction, f"/transactions/{transaction_id}", "PATCH", json=data.to_wire()
        )

    async def delete_transaction(self, transaction_id: str) -> None:
        await self._delete(f"/transactions/{transaction_id}")

    # ── Metadata & market data ────────────────────────

    async def categories(self) -> list[CategoryMeta]:
        return await self._call(list[CategoryMeta], "/metadata/categories")

    async def stock_markets(self) -> list[StockMarketMeta]:
        return await self._call(list[StockMarketMeta], "/metadata/stock-markets")

    async def usd_try_rate(self) -> Decimal:
        rate = await self._call(ExchangeRate, "/market-data/usd-try")
        return rate.rate

    async def supported_assets(self) -> dict[str, list[SupportedAsset]]:
        return await self._call(dict[str, list[SupportedAsset]], "/market-data/supported-assets")

    # ── Dashboard & reports ───────────────────────────

    async def dashboard_overview(
        self, month: int, year: int, page: int = 0, size: int = 20
    ) -> DashboardOverview:
        return await self._call(
            DashboardOverview,
            "/dashboard/overview",
            params={"month": f"{month:02d}", "year": year, "page": page, "size": size},
        )

    async def report_summary(self, start: dt.date, end: dt.date) -> ReportSummary:
        if start > end:
            raise ValidationError("Start date must be before end date.")
        return await self._call(
            ReportSummary,
            "/reports/summary",
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
        )

    # ── Investments ───────────────────────────────────

    async def investments(self) -> list[InvestmentAsset]:
        return await self._call(list[InvestmentAsset], "/investments")

    async def create_investment(self, data: InvestmentCreate) -> InvestmentAsset:
        return await self._call(InvestmentAsset, "/investments", "POST", json=data.to_wire())

    async def update_investment(self, investment_id: str, data: InvestmentUpdate) -> InvestmentAsset:
        return await self._call(
            InvestmentAsset, f"/investments/{investment_id}", "PATCH", json=data.to_wire()
        )

    async def delete_investment(self, investment_id: str) -> None:
        await self._delete(f"/investments/{investment_id}")
