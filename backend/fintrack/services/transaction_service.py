"""In-memory transaction and investment store backing the mock API."""

import uuid
from decimal import ROUND_HALF_UP, Decimal

import structlog

from fintrack.core.exceptions import NotFoundError
from fintrack.schemas.common import Page
from fintrack.schemas.investment import InvestmentAsset, InvestmentCreate, InvestmentUpdate
from fintrack.schemas.transaction import Transaction, TransactionCreate, TransactionUpdate
from fintrack.services import seed_data
from fintrack.services.installment_service import expand_installments

logger = structlog.get_logger()


class TransactionService:
    def __init__(self, transactions: list[Transaction] | None = None):
        self.transactions = seed_data.base_transactions() if transactions is None else transactions

    def list_transactions(
        self,
        month: int | None = None,
        year: int | None = None,
        page: int = 0,
        size: int = 20,
        expanded: bool = True,
    ) -> Page[Transaction]:
        """Filter by month/year (either may be omitted), newest first."""
        rows = expand_installments(self.transactions) if expanded else list(self.transactions)
        if year is not None:
            rows = [t for t in rows if t.date.year == year]
        if month is not None:
            rows = [t for t in rows if t.date.month == month]
        rows.sort(key=lambda t: t.date, reverse=True)
        return Page[Transaction].of(rows, page, size)

    def get_transaction(self, transaction_id: str) -> Transaction:
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        raise NotFoundError("Transaction")

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        txn = Transaction(id=f"custom-{uuid.uuid4().hex[:12]}", **data.model_dump())
        self.transactions.append(txn)
        logger.info("transaction_created", id=txn.id, installment=txn.is_installment)
        return txn

    def update_transaction(self, transaction_id: str, data: TransactionUpdate) -> Transaction:
        current = self.get_transaction(transaction_id)
        updated = current.model_copy(update=data.model_dump(exclude_unset=True, exclude_none=True))
        self.transactions[self.transactions.index(current)] = updated
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        self.transactions.remove(self.get_transaction(transaction_id))
        logger.info("transaction_deleted", id=transaction_id)


class InvestmentStore:
    def __init__(self, assets: list[InvestmentAsset] | None = None):
        self.assets = seed_data.demo_investments() if assets is None else assets

    def list_assets(self) -> list[InvestmentAsset]:
        return list(self.assets)

    def get_asset(self, asset_id: str) -> InvestmentAsset:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        raise NotFoundError("Investment")

    def create_asset(self, data: InvestmentCreate) -> InvestmentAsset:
        """New holdings are priced at cost until a quote arrives."""
        asset = InvestmentAsset(
            id=f"inv-{uuid.uuid4().hex[:12]}",
            symbol=data.symbol.upper(),
            name=data.symbol.upper(),
            quantity=data.quantity,
            avg_cost_try=data.avg_cost,
            current_price_try=data.avg_cost,
            asset_type=data.asset_type,
            stock_market=data.stock_market,
            original_currency="TRY",
        )
        self.assets.append(asset)
        logger.info("investment_created", id=asset.id, symbol=asset.symbol)
        return asset

    def update_asset(self, asset_id: str, data: InvestmentUpdate) -> InvestmentAsset:
        current = self.get_asset(asset_id)
        avg_cost_try = data.total_cost_try / data.quantity if data.quantity else Decimal("0")
        updated = current.model_copy(
            update={
                "quantity": data.quantity,
                "avg_cost_try": avg_cost_try.quantize(Decimal("0.000001"), rounding=ROUND_HALF_UP),
                "avg_cost_original": data.avg_cost_original,
                "original_currency": data.purchase_currency,
            }
        ).with_price(current.current_price_try)
        self.assets[self.assets.index(current)] = updated
        return updated

    def delete_asset(self, asset_id: str) -> None:
        self.assets.remove(self.get_asset(asset_id))
        logger.info("investment_deleted", id=asset_id)
