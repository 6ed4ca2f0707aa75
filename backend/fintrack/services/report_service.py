"""Report service: totals, averages, category breakdown and highlights."""

import datetime as dt
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from fintrack.schemas.budget import BudgetMonth
from fintrack.schemas.report import (
    CategoryBreakdownItem,
    DataPoints,
    DateRange,
    MonthlySeriesItem,
    ReportAverages,
    ReportMetadata,
    ReportSummary,
    ReportTotals,
)
from fintrack.schemas.transaction import Transaction
from fintrack.services.installment_service import add_months

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def category_id(label: str) -> str:
    return label.strip().upper().replace(" ", "_")


def _average(total: Decimal, months: int) -> Decimal:
    if months <= 0:
        return ZERO.quantize(CENTS)
    return (total / months).quantize(CENTS, rounding=ROUND_HALF_UP)


def _savings_rate(income: Decimal, savings: Decimal) -> Decimal:
    if income == 0:
        return ZERO.quantize(CENTS)
    return (savings / income * 100).quantize(CENTS, rounding=ROUND_HALF_UP)


def _breakdown(pairs: Iterable[tuple[str, Decimal]]) -> list[CategoryBreakdownItem]:
    """Sum ``(label, amount)`` pairs by label, largest total first.

    Equal totals keep the order in which their labels were first seen.
    """
    totals: dict[str, Decimal] = {}
    for label, amount in pairs:
        totals[label] = totals.get(label, ZERO) + amount
    items = [
        CategoryBreakdownItem(category_id=category_id(label), category_label=label, total_try=total)
        for label, total in totals.items()
    ]
    return sorted(items, key=lambda item: item.total_try, reverse=True)


def _build_summary(
    series: list[MonthlySeriesItem],
    breakdown: list[CategoryBreakdownItem],
    date_range: DateRange,
    month_count: int,
    data_points: DataPoints | None = None,
) -> ReportSummary:
    income = sum((m.income_try for m in series), ZERO)
    expense = sum((m.expense_try for m in series), ZERO)
    savings = income - expense

    return ReportSummary(
        range=date_range,
        totals=ReportTotals(
            income_try=income,
            expense_try=expense,
            net_savings_try=savings,
            savings_rate_pct=_savings_rate(income, savings),
        ),
        averages=ReportAverages(
            monthly_income_try=_average(income, month_count),
            monthly_expense_try=_average(expense, month_count),
            monthly_savings_try=_average(savings, month_count),
        ),
        monthly_series=series,
        category_breakdown=breakdown,
        top_category=breakdown[0] if breakdown else None,
        # max() keeps the first of equal candidates
        best_savings_month=max(series, key=lambda m: m.net_savings_try) if series else None,
        worst_expense_month=max(series, key=lambda m: m.expense_try) if series else None,
        metadata=ReportMetadata(generated_at=datetime.now(timezone.utc), data_points=data_points),
    )


def summarize(budgets: list[BudgetMonth]) -> ReportSummary:
    """Roll a list of budget months up into a report."""
    series = [
        MonthlySeriesItem(
            month=b.month,
            label=b.label,
            income_try=b.income_try,
            expense_try=b.expenses_try,
            net_savings_try=b.net_savings_try,
        )
        for b in budgets
    ]
    breakdown = _breakdown((c.category, c.spent_try) for b in budgets for c in b.categories)
    date_range = DateRange(
        start=budgets[0].month if budgets else "",
        end=budgets[-1].month if budgets else "",
    )
    return _build_summary(series, breakdown, date_range, len(budgets))


def month_span(start: dt.date, end: dt.date) -> int:
    """Inclusive number of calendar months between two dates, at least 1."""
    diff = (end.year - start.year) * 12 + (end.month - start.month) + 1
    return max(diff, 1)


def summarize_transactions(
    transactions: list[Transaction],
    start: dt.date,
    end: dt.date,
) -> ReportSummary:
    """Report over raw transactions dated within ``[start, end]``.

    Installments are expected to be expanded already. The category
    breakdown only counts expenses.
    """
    in_range = [t for t in transactions if start <= t.date <= end]

    by_month: dict[str, list[Transaction]] = {}
    for txn in in_range:
        by_month.setdefault(txn.month_key, []).append(txn)

    series = []
    month_key = start.strftime("%Y-%m")
    for _ in range(month_span(start, end)):
        month_txns = by_month.get(month_key, [])
        income = sum((t.amount_try for t in month_txns if t.type == "income"), ZERO)
        expense = sum((t.amount_try for t in month_txns if t.type == "expense"), ZERO)
        year, month = (int(part) for part in month_key.split("-"))
        series.append(
            MonthlySeriesItem(
                month=month_key,
                label=dt.date(year, month, 1).strftime("%b %Y"),
                income_try=income,
                expense_try=expense,
                net_savings_try=income - expense,
            )
        )
        month_key = add_months(month_key, 1)

    breakdown = _breakdown((t.category, t.amount_try) for t in in_range if t.type == "expense")
    months = month_span(start, end)
    return _build_summary(
        series,
        breakdown,
        DateRange(start=start.isoformat(), end=end.isoformat()),
        months,
        DataPoints(categories=len(breakdown), months=months, transactions=len(in_range)),
    )
