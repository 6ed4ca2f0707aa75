"""Transaction API routes."""

from fastapi import APIRouter, Depends, Query, Response

from fintrack.api.deps import get_current_user, get_transaction_service
from fintrack.core.envelope import success_envelope
from fintrack.schemas.transaction import TransactionCreate, TransactionUpdate
from fintrack.schemas.user import AuthUser
from fintrack.services.transaction_service import TransactionService

router = APIRouter()


@router.get("")
async def list_transactions(
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = None,
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=1000),
    expanded: bool = True,
    current_user: AuthUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    """List transactions, newest first.

    With ``expanded=true`` installments come back as one row per month.
    """
    return success_envelope(service.list_transactions(month, year, page, size, expanded))


@router.post("", status_code=201)
async def create_transaction(
    data: TransactionCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    return success_envelope(service.create_transaction(data), message="Transaction created")


@router.patch("/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    return success_envelope(service.update_transaction(transaction_id, data))


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    service.delete_transaction(transaction_id)
    return Response(status_code=204)
