"""Seed data for the in-memory (mock) variant of the API.

The transactions cover Feb-May 2026 and include one 9-month phone
installment starting in March, matching the default budget window.
"""

from decimal import Decimal

from fintrack.schemas.investment import InvestmentAsset
from fintrack.schemas.metadata import CategoryMeta, StockMarketMeta, SupportedAsset
from fintrack.schemas.transaction import Transaction
from fintrack.schemas.user import AuthUser
from fintrack.services.investment_service import reprice

# (id, title, amount, date, category, payment method)
_EXPENSES = [
    ("rent-2026-02", "Rent", "8500", "2026-02-01", "Housing", "transfer"),
    ("food-2026-02", "Groceries", "3200", "2026-02-06", "Food", "card"),
    ("transport-2026-02", "Transport", "950", "2026-02-09", "Transport", "card"),
    ("utilities-2026-02", "Utilities", "1200", "2026-02-12", "Utilities", "transfer"),
    ("lifestyle-2026-02", "Gym + Streaming", "1300", "2026-02-15", "Lifestyle", "card"),
    ("rent-2026-03", "Rent", "8500", "2026-03-01", "Housing", "transfer"),
    ("food-2026-03", "Groceries", "3300", "2026-03-06", "Food", "card"),
    ("valentine-2026-03", "Valentine's Day", "1500", "2026-03-14", "Lifestyle", "card"),
    ("father-debt-2026-03", "Father's Debt", "20000", "2026-03-20", "Debt", "transfer"),
    ("utilities-2026-03", "Utilities", "1250", "2026-03-21", "Utilities", "transfer"),
    ("rent-2026-04", "Rent", "8500", "2026-04-01", "Housing", "transfer"),
    ("food-2026-04", "Groceries", "3100", "2026-04-06", "Food", "card"),
    ("transport-2026-04", "Transport", "850", "2026-04-09", "Transport", "card"),
    ("utilities-2026-04", "Utilities", "1150", "2026-04-12", "Utilities", "transfer"),
    ("lifestyle-2026-04", "Weekend escape", "2200", "2026-04-17", "Lifestyle", "card"),
    ("rent-2026-05", "Rent", "8500", "2026-05-01", "Housing", "transfer"),
    ("food-2026-05", "Groceries", "3050", "2026-05-06", "Food", "card"),
    ("utilities-2026-05", "Utilities", "1100", "2026-05-12", "Utilities", "transfer"),
    ("lifestyle-2026-05", "Tech accessories", "1400", "2026-05-19", "Lifestyle", "card"),
]

PHONE_INSTALLMENT = {
    "id": "installment-phone",
    "title": "Phone Installment",
    "amount_try": Decimal("0"),
    "date": "2026-03-05",
    "category": "Installment",
    "type": "expense",
    "payment_method": "card",
    "is_installment": True,
    "installment_meta": {"total_try": Decimal("18000"), "months": 9, "start_month": "2026-03"},
}


def base_transactions() -> list[Transaction]:
    """Fresh copies of the seed transactions, installments unexpanded."""
    rows = [
        Transaction(
            id=txn_id,
            title=title,
            amount_try=Decimal(amount),
            date=date,
            category=category,
            type="expense",
            payment_method=method,
        )
        for txn_id, title, amount, date, category, method in _EXPENSES
    ]
    # The installment sits between the March and April rows
    rows.insert(10, Transaction(**PHONE_INSTALLMENT))
    return rows


CATEGORIES = [
    CategoryMeta(id="HOUSING", label="Housing", icon="fa-solid fa-house"),
    CategoryMeta(id="UTILITIES", label="Utilities", icon="fa-solid fa-bolt"),
    CategoryMeta(id="FOOD", label="Food", icon="fa-solid fa-utensils"),
    CategoryMeta(id="SHOPPING", label="Shopping", icon="fa-solid fa-cart-shopping"),
    CategoryMeta(id="TRANSPORT", label="Transport", icon="fa-solid fa-car"),
    CategoryMeta(id="TRAVEL", label="Travel", icon="fa-solid fa-plane"),
    CategoryMeta(id="ENTERTAINMENT", label="Entertainment", icon="fa-solid fa-film"),
    CategoryMeta(id="HEALTH", label="Health", icon="fa-solid fa-heart-pulse"),
    CategoryMeta(id="EDUCATION", label="Education", icon="fa-solid fa-graduation-cap"),
    CategoryMeta(id="LIFESTYLE", label="Lifestyle", icon="fa-solid fa-spa"),
    CategoryMeta(id="DEBT", label="Debt", icon="fa-solid fa-credit-card"),
    CategoryMeta(id="INSTALLMENT", label="Installment", icon="fa-solid fa-file-invoice-dollar"),
    CategoryMeta(id="SALARY", label="Salary", icon="fa-solid fa-sack-dollar"),
    CategoryMeta(id="OTHER", label="Other", icon="fa-solid fa-ellipsis"),
]

STOCK_MARKETS = [
    StockMarketMeta(id="BIST", label="Borsa Istanbul", suffix="IS", currency="TRY", supported_asset_types=["STOCK"]),
    StockMarketMeta(id="TEFAS", label="TEFAS", suffix="TEFAS", currency="TRY", supported_asset_types=["FUND"]),
    StockMarketMeta(id="NASDAQ", label="NASDAQ", suffix="US", currency="USD", supported_asset_types=["STOCK", "FUND"]),
    StockMarketMeta(
        id="NYSE",
        label="New York Stock Exchange",
        suffix="US",
        currency="USD",
        supported_asset_types=["STOCK", "FUND"],
    ),
    StockMarketMeta(
        id="OTHER",
        label="Other",
        suffix="OTHER",
        currency="TRY",
        supported_asset_types=["CURRENCY", "GOLD_SILVER"],
    ),
]

SUPPORTED_ASSETS: dict[str, list[SupportedAsset]] = {
    "GOLD_SILVER": [
        SupportedAsset(slug="altin/gram-altin", label="Gram Altın"),
        SupportedAsset(slug="altin/ceyrek-altin", label="Çeyrek Altın"),
        SupportedAsset(slug="altin/altin-ons", label="Ons Altın"),
        SupportedAsset(slug="emtia/gram-gumus", label="Gümüş Gram"),
    ],
    "CURRENCY": [SupportedAsset(slug="USD", label="Amerikan Doları")],
}

DEMO_PASSWORD = "Demo123!"
DEMO_USER = AuthUser(
    id="demo-user",
    username="demo",
    email="demo@fintrack.local",
    net_salary_usd=Decimal("1190"),
)


def demo_investments() -> list[InvestmentAsset]:
    assets = [
        InvestmentAsset(
            id="inv-gram-altin",
            symbol="GRAM",
            name="Gram Altın",
            quantity=Decimal("12"),
            avg_cost_try=Decimal("2450"),
            current_price_try=Decimal("2450"),
            change_percent=Decimal("0.84"),
            asset_type="GOLD_SILVER",
            stock_market="OTHER",
            original_currency="TRY",
        ),
        InvestmentAsset(
            id="inv-thyao",
            symbol="THYAO",
            name="Türk Hava Yolları",
            quantity=Decimal("40"),
            avg_cost_try=Decimal("265.50"),
            current_price_try=Decimal("265.50"),
            change_percent=Decimal("-1.12"),
            asset_type="STOCK",
            stock_market="BIST",
            stock_market_display_name="Borsa Istanbul",
            original_currency="TRY",
        ),
    ]
    prices = {"GRAM": Decimal("2612.40"), "THYAO": Decimal("281.75")}
    return reprice(assets, prices)
