"""Metadata and market data API routes."""

from fastapi import APIRouter, Depends

from fintrack.api.deps import get_current_user, get_market_data
from fintrack.core.envelope import success_envelope
from fintrack.schemas.metadata import ExchangeRate
from fintrack.schemas.user import AuthUser
from fintrack.services import seed_data
from fintrack.services.market_data_service import MarketDataService

router = APIRouter()
market_router = APIRouter()


@router.get("/categories")
async def categories(current_user: AuthUser = Depends(get_current_user)):
    return success_envelope(seed_data.CATEGORIES)


@router.get("/stock-markets")
async def stock_markets(current_user: AuthUser = Depends(get_current_user)):
    return success_envelope(seed_data.STOCK_MARKETS)


@market_router.get("/usd-try")
async def usd_try_rate(
    current_user: AuthUser = Depends(get_current_user),
    market_data: MarketDataService = Depends(get_market_data),
):
    return success_envelope(ExchangeRate(rate=await market_data.usd_try_rate()))


@market_router.get("/supported-assets")
async def supported_assets(current_user: AuthUser = Depends(get_current_user)):
    return success_envelope(seed_data.SUPPORTED_ASSETS)
