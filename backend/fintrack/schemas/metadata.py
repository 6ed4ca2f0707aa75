"""Metadata schemas: categories, stock markets, market data."""

from decimal import Decimal

from fintrack.schemas.base import CamelModel


class CategoryMeta(CamelModel):
    id: str
    label: str
    icon: str | None = None


class StockMarketMeta(CamelModel):
    id: str
    label: str
    suffix: str
    currency: str
    supported_asset_types: list[str]


class ExchangeRate(CamelModel):
    rate: Decimal


class SupportedAsset(CamelModel):
    slug: str
    label: str
