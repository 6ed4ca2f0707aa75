"""Report summary schemas."""

from datetime import datetime
from decimal import Decimal

from fintrack.schemas.base import CamelModel


class DateRange(CamelModel):
    start: str
    end: str


class ReportTotals(CamelModel):
    income_try: Decimal
    expense_try: Decimal
    net_savings_try: Decimal
    savings_rate_pct: Decimal


class ReportAverages(CamelModel):
    monthly_income_try: Decimal
    monthly_expense_try: Decimal
    monthly_savings_try: Decimal


class MonthlySeriesItem(CamelModel):
    month: str
    label: str
    income_try: Decimal
    expense_try: Decimal
    net_savings_try: Decimal


class CategoryBreakdownItem(CamelModel):
    category_id: str
    category_label: str
    total_try: Decimal


class DataPoints(CamelModel):
    categories: int
    months: int
    transactions: int


class ReportMetadata(CamelModel):
    generated_at: datetime
    data_points: DataPoints | None = None


class ReportSummary(CamelModel):
    currency: str = "TRY"
    range: DateRange
    totals: ReportTotals
    averages: ReportAverages
    monthly_series: list[MonthlySeriesItem]
    category_breakdown: list[CategoryBreakdownItem]
    top_category: CategoryBreakdownItem | None = None
    best_savings_month: MonthlySeriesItem | None = None
    worst_expense_month: MonthlySeriesItem | None = None
    metadata: ReportMetadata | None = None
