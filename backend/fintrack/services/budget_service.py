"""Budget service: monthly aggregates, category watchlist, savings forecast."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

import structlog

from fintrack.config import BudgetMonthConfig, Settings, settings
from fintrack.schemas.budget import (
    AlertLevel,
    BudgetCategory,
    BudgetMonth,
    BudgetSummary,
    CategoryWatchItem,
    DashboardOverview,
    ForecastItem,
)
from fintrack.schemas.common import Page
from fintrack.schemas.investment import InvestmentAsset
from fintrack.schemas.transaction import Transaction
from fintrack.services.installment_service import (
    add_months,
    expand_installments,
    get_monthly_transactions,
)

logger = structlog.get_logger()

CENTS = Decimal("0.01")
LIMIT_DANGER_RATIO = Decimal("1.00")
LIMIT_WARNING_RATIO = Decimal("0.85")
FORECAST_SPAN = 3  # months either side of the selected month


def _sum(transactions: list[Transaction]) -> Decimal:
    return sum((t.amount_try for t in transactions), Decimal("0"))


def build_budgets(
    salary_usd: Decimal,
    usd_try_rate: Decimal,
    transactions: list[Transaction],
    months: list[BudgetMonthConfig] | None = None,
    category_limits: dict[str, Decimal] | None = None,
) -> list[BudgetMonth]:
    """Build one BudgetMonth per configured month, in configured order.

    Income is the converted salary for every month; income transactions
    do not change it. Installments must already be expanded.
    """
    months = settings.budget_months if months is None else months
    category_limits = settings.category_limit_map if category_limits is None else category_limits
    income_try = (Decimal(str(salary_usd)) * Decimal(str(usd_try_rate))).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )

    budgets = []
    for window in months:
        month_txns = [t for t in transactions if t.month_key == window.month]
        expenses_try = _sum([t for t in month_txns if t.type == "expense"])
        categories = [
            BudgetCategory(
                category=category,
                limit_try=limit_try,
                spent_try=_sum([t for t in month_txns if t.category == category]),
            )
            for category, limit_try in category_limits.items()
        ]
        budgets.append(
            BudgetMonth(
                month=window.month,
                label=window.label or window.month,
                income_try=income_try,
                expenses_try=expenses_try,
                net_savings_try=income_try - expenses_try,
                categories=categories,
            )
        )
    return budgets


def limit_status(spent_try: Decimal, limit_try: Decimal) -> AlertLevel:
    if limit_try <= 0:
        return "normal"
    ratio = (spent_try / limit_try).quantize(CENTS, rounding=ROUND_HALF_UP)
    if ratio >= LIMIT_DANGER_RATIO:
        return "danger"
    if ratio >= LIMIT_WARNING_RATIO:
        return "warning"
    return "normal"


def category_watchlist(budget: BudgetMonth) -> list[CategoryWatchItem]:
    return [
        CategoryWatchItem(
            **category.model_dump(),
            alert_level=limit_status(category.spent_try, category.limit_try),
        )
        for category in budget.categories
    ]


def budget_forecast(budgets: list[BudgetMonth], current_month: str) -> list[ForecastItem]:
    """Net savings for the three months before and after ``current_month``.

    Future months, and months outside the budget window, report zero.
    """
    by_month = {b.month: b for b in budgets}
    forecast = []
    for offset in range(-FORECAST_SPAN, FORECAST_SPAN + 1):
        month_key = add_months(current_month, offset)
        budget = by_month.get(month_key)
        savings = budget.net_savings_try if budget and offset <= 0 else Decimal("0")
        year, month = (int(part) for part in month_key.split("-"))
        forecast.append(
            ForecastItem(
                month=month_key,
                label=dt.date(year, month, 1).strftime("%b").upper(),
                savings=savings,
            )
        )
    return forecast


def card_expenses(transactions: list[Transaction], month_key: str) -> Decimal:
    """Card-paid expenses dated in ``month_key``. Installments must already be expanded."""
    return _sum(
        [
            t
            for t in transactions
            if t.month_key == month_key and t.type == "expense" and t.payment_method == "card"
        ]
    )


class BudgetService:
    """Composes expansion and aggregation into the dashboard views."""

    def __init__(self, config: Settings = settings):
        self.config = config

    def monthly_budgets(
        self,
        transactions: list[Transaction],
        salary_usd: Decimal,
        usd_try_rate: Decimal,
        months: list[BudgetMonthConfig] | None = None,
    ) -> list[BudgetMonth]:
        """Expand installments, then aggregate over the configured window."""
        return build_budgets(
            salary_usd,
            usd_try_rate,
            expand_installments(transactions),
            months=self.config.budget_months if months is None else months,
            category_limits=self.config.category_limit_map,
        )

    def overview(
        self,
        transactions: list[Transaction],
        investments: list[InvestmentAsset],
        salary_usd: Decimal,
        usd_try_rate: Decimal,
        month_key: str,
        page: int = 0,
        size: int = 20,
    ) -> DashboardOverview:
        budgets = self.monthly_budgets(transactions, salary_usd, usd_try_rate)
        selected = next((b for b in budgets if b.month == month_key), None)
        if selected is None:
            logger.info("budget_month_outside_window", month=month_key)
            selected = self.monthly_budgets(
                transactions,
                salary_usd,
                usd_try_rate,
                months=[BudgetMonthConfig(month=month_key, label=month_key)],
            )[0]

        expanded = expand_installments(transactions)
        card_limit = self.config.credit_card_limit_try - card_expenses(expanded, month_key)

        return DashboardOverview(
            summary=BudgetSummary(
                income=selected.income_try,
                expense=selected.expenses_try,
                savings=selected.net_savings_try,
                credit_card_limit=card_limit,
                usd_rate=usd_try_rate,
            ),
            forecast=budget_forecast(budgets, month_key),
            category_watchlist=category_watchlist(selected),
            investments=investments,
            current_usd_try_rate=usd_try_rate,
            recent_transactions=Page[Transaction].of(
                get_monthly_transactions(month_key, expanded), page, size
            ),
        )
