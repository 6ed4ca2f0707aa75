"""Investment portfolio schemas."""

from decimal import Decimal, InvalidOperation

from fintrack.core.exceptions import ValidationError
from fintrack.schemas.base import CamelModel

MICROS = Decimal("0.000001")


class InvestmentAsset(CamelModel):
    id: str | None = None
    symbol: str
    name: str
    quantity: Decimal
    avg_cost_try: Decimal
    current_price_try: Decimal
    change_percent: Decimal = Decimal("0")
    profit_loss_try: Decimal = Decimal("0")
    asset_type: str | None = None
    stock_market: str | None = None
    stock_market_display_name: str | None = None
    original_currency: str | None = None
    avg_cost_original: Decimal | None = None
    current_price_original: Decimal | None = None

    @property
    def cost_basis_try(self) -> Decimal:
        return self.avg_cost_try * self.quantity

    @property
    def market_value_try(self) -> Decimal:
        return self.current_price_try * self.quantity

    def with_price(self, current_price_try: Decimal) -> "InvestmentAsset":
        """Return a copy priced at ``current_price_try`` with P/L recomputed."""
        return self.model_copy(
            update={
                "current_price_try": current_price_try,
                "profit_loss_try": (current_price_try - self.avg_cost_try) * self.quantity,
            }
        )


class InvestmentCreate(CamelModel):
    symbol: str
    quantity: Decimal
    avg_cost: Decimal
    asset_type: str = "FUND"
    stock_market: str | None = None


class InvestmentUpdate(CamelModel):
    quantity: Decimal
    total_cost_try: Decimal
    avg_cost_original: Decimal
    purchase_currency: str = "TRY"


class InvestmentForm(CamelModel):
    """Raw portfolio form input."""

    asset_type: str = "FUND"
    stock_market: str = ""
    symbol: str = ""
    quantity: str = ""
    avg_cost: str = ""

    def parsed(self) -> tuple[Decimal, Decimal]:
        """Return ``(quantity, avg_cost)`` rounded to 6 places."""
        try:
            quantity = Decimal(self.quantity.strip())
            avg_cost = Decimal(self.avg_cost.strip())
            valid = (
                bool(self.symbol.strip())
                and quantity.is_finite()
                and avg_cost.is_finite()
                and quantity >= 0
                and avg_cost >= 0
            )
            if valid:
                return quantity.quantize(MICROS), avg_cost.quantize(MICROS)
        except InvalidOperation:
            pass
        raise ValidationError("Please fill all fields with valid values.")

    def to_create(self, requires_market: bool = False) -> InvestmentCreate:
        quantity, avg_cost = self.parsed()
        if requires_market and not self.stock_market:
            raise ValidationError("Please select a market.")
        return InvestmentCreate(
            symbol=self.symbol.strip(),
            quantity=quantity,
            avg_cost=avg_cost,
            asset_type=self.asset_type,
            stock_market=self.stock_market if requires_market else None,
        )


class PortfolioSummary(CamelModel):
    total_invested_try: Decimal
    total_current_value_try: Decimal
    total_profit_loss_try: Decimal
    total_profit_loss_pct: Decimal


class AllocationSlice(CamelModel):
    symbol: str
    value_try: Decimal
