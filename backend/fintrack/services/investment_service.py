"""Investment portfolio maths."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fintrack.core.exceptions import ValidationError
from fintrack.schemas.investment import (
    AllocationSlice,
    InvestmentAsset,
    InvestmentForm,
    InvestmentUpdate,
    PortfolioSummary,
)

CENTS = Decimal("0.01")
MICROS = Decimal("0.000001")
ZERO = Decimal("0")


def portfolio_summary(assets: list[InvestmentAsset]) -> PortfolioSummary:
    invested = sum((a.cost_basis_try for a in assets), ZERO)
    current = sum((a.market_value_try for a in assets), ZERO)
    profit_loss = current - invested
    pct = (profit_loss / invested * 100).quantize(CENTS, rounding=ROUND_HALF_UP) if invested else ZERO
    return PortfolioSummary(
        total_invested_try=invested,
        total_current_value_try=current,
        total_profit_loss_try=profit_loss,
        total_profit_loss_pct=pct,
    )


def allocation(assets: list[InvestmentAsset]) -> list[AllocationSlice]:
    return [AllocationSlice(symbol=a.symbol, value_try=a.market_value_try) for a in assets]


def reprice(assets: list[InvestmentAsset], prices: dict[str, Decimal]) -> list[InvestmentAsset]:
    """Apply new TRY prices by symbol; assets without a quote are left as is."""
    return [a.with_price(prices[a.symbol]) if a.symbol in prices else a for a in assets]


def build_update_request(asset: InvestmentAsset, form: InvestmentForm) -> InvestmentUpdate:
    """Turn an edit form into the PATCH payload for ``asset``.

    The cost entered is in the purchase currency; it is converted to TRY
    with the rate implied by the asset's stored costs.
    """
    if not asset.id:
        raise ValidationError("Unable to update asset without an id.")
    quantity, avg_cost = form.parsed()

    purchase_currency = asset.original_currency or "TRY"
    if purchase_currency == "TRY" or not asset.avg_cost_original:
        fx_rate = Decimal("1")
    else:
        fx_rate = asset.avg_cost_try / asset.avg_cost_original

    try:
        total_cost_try = (avg_cost * quantity * fx_rate).quantize(MICROS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError("Please fill all fields with valid values.") from None

    return InvestmentUpdate(
        quantity=quantity,
        total_cost_try=total_cost_try,
        avg_cost_original=avg_cost,
        purchase_currency=purchase_currency,
    )
