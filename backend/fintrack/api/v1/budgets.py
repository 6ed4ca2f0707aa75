"""Budget, dashboard and report API routes."""

import datetime as dt

from fastapi import APIRouter, Depends, Query

from fintrack.api.deps import (
    get_budget_service,
    get_current_user,
    get_investment_store,
    get_market_data,
    get_transaction_service,
)
from fintrack.core.envelope import success_envelope
from fintrack.core.exceptions import ValidationError
from fintrack.schemas.user import AuthUser
from fintrack.services.budget_service import BudgetService
from fintrack.services.installment_service import expand_installments
from fintrack.services.market_data_service import MarketDataService
from fintrack.services.report_service import summarize, summarize_transactions
from fintrack.services.transaction_service import InvestmentStore, TransactionService

router = APIRouter()
dashboard_router = APIRouter()
reports_router = APIRouter()


@router.get("")
async def monthly_budgets(
    current_user: AuthUser = Depends(get_current_user),
    transactions: TransactionService = Depends(get_transaction_service),
    market_data: MarketDataService = Depends(get_market_data),
    budgets: BudgetService = Depends(get_budget_service),
):
    """One budget month per configured month, salary converted at today's rate."""
    rate = await market_data.usd_try_rate()
    return success_envelope(
        budgets.monthly_budgets(transactions.transactions, current_user.net_salary_usd, rate)
    )


@router.get("/report")
async def budget_report(
    current_user: AuthUser = Depends(get_current_user),
    transactions: TransactionService = Depends(get_transaction_service),
    market_data: MarketDataService = Depends(get_market_data),
    budgets: BudgetService = Depends(get_budget_service),
):
    """Totals, averages and highlights over the configured budget months."""
    rate = await market_data.usd_try_rate()
    months = budgets.monthly_budgets(transactions.transactions, current_user.net_salary_usd, rate)
    return success_envelope(summarize(months))


@dashboard_router.get("/overview")
async def dashboard_overview(
    month: int = Query(..., ge=1, le=12),
    # the forecast reaches three months past the selected one
    year: int = Query(..., ge=1970, le=9996),
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=1000),
    current_user: AuthUser = Depends(get_current_user),
    transactions: TransactionService = Depends(get_transaction_service),
    investments: InvestmentStore = Depends(get_investment_store),
    market_data: MarketDataService = Depends(get_market_data),
    budgets: BudgetService = Depends(get_budget_service),
):
    rate = await market_data.usd_try_rate()
    overview = budgets.overview(
        transactions.transactions,
        investments.list_assets(),
        current_user.net_salary_usd,
        rate,
        month_key=f"{year:04d}-{month:02d}",
        page=page,
        size=size,
    )
    return success_envelope(overview)


@reports_router.get("/summary")
async def report_summary(
    start_date: dt.date = Query(..., alias="startDate"),
    end_date: dt.date = Query(..., alias="endDate"),
    current_user: AuthUser = Depends(get_current_user),
    transactions: TransactionService = Depends(get_transaction_service),
):
    """Income, expenses and category spend between two dates (inclusive)."""
    if start_date > end_date:
        raise ValidationError("Start date must be before end date.")
    expanded = expand_installments(transactions.transactions)
    return success_envelope(summarize_transactions(expanded, start_date, end_date))
