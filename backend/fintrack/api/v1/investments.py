"""Investment portfolio API routes."""

from fastapi import APIRouter, Depends, Response

from fintrack.api.deps import get_current_user, get_investment_store
from fintrack.core.envelope import success_envelope
from fintrack.schemas.investment import InvestmentCreate, InvestmentUpdate
from fintrack.schemas.user import AuthUser
from fintrack.services.investment_service import allocation, portfolio_summary
from fintrack.services.transaction_service import InvestmentStore

router = APIRouter()


@router.get("")
async def list_investments(
    current_user: AuthUser = Depends(get_current_user),
    store: InvestmentStore = Depends(get_investment_store),
):
    return success_envelope(store.list_assets())


@router.get("/summary")
async def investments_summary(
    current_user: AuthUser = Depends(get_current_user),
    store: InvestmentStore = Depends(get_investment_store),
):
    """Portfolio totals plus the value of each holding."""
    assets = store.list_assets()
    return success_envelope(
        {
            "summary": portfolio_summary(assets),
            "allocation": allocation(assets),
        }
    )


@router.post("", status_code=201)
async def create_investment(
    data: InvestmentCreate,
    current_user: AuthUser = Depends(get_current_user),
    store: InvestmentStore = Depends(get_investment_store),
):
    return success_envelope(store.create_asset(data), message="Investment created")


@router.patch("/{investment_id}")
async def update_investment(
    investment_id: str,
    data: InvestmentUpdate,
    current_user: AuthUser = Depends(get_current_user),
    store: InvestmentStore = Depends(get_investment_store),
):
    return success_envelope(store.update_asset(investment_id, data))


@router.delete("/{investment_id}", status_code=204)
async def delete_investment(
    investment_id: str,
    current_user: AuthUser = Depends(get_current_user),
    store: InvestmentStore = Depends(get_investment_store),
):
    store.delete_asset(investment_id)
    return Response(status_code=204)
