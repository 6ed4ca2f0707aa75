"""Budget schemas."""

from decimal import Decimal
from typing import Literal

from fintrack.schemas.base import CamelModel
from fintrack.schemas.common import Page
from fintrack.schemas.investment import InvestmentAsset
from fintrack.schemas.transaction import Transaction

AlertLevel = Literal["normal", "warning", "danger"]


class BudgetCategory(CamelModel):
    category: str
    limit_try: Decimal
    spent_try: Decimal


class BudgetMonth(CamelModel):
    month: str  # "2026-02"
    label: str  # "Feb 2026"
    income_try: Decimal
    expenses_try: Decimal
    net_savings_try: Decimal
    categories: list[BudgetCategory]


class CategoryWatchItem(BudgetCategory):
    alert_level: AlertLevel


class ForecastItem(CamelModel):
    month: str
    label: str
    savings: Decimal


class BudgetSummary(CamelModel):
    income: Decimal
    expense: Decimal
    savings: Decimal
    credit_card_limit: Decimal
    usd_rate: Decimal


class DashboardOverview(CamelModel):
    summary: BudgetSummary
    forecast: list[ForecastItem]
    category_watchlist: list[CategoryWatchItem]
    investments: list[InvestmentAsset]
    current_usd_try_rate: Decimal
    recent_transactions: Page[Transaction]
