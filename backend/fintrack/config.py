"""Application configuration using pydantic-settings."""

from decimal import Decimal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings


class BudgetMonthConfig(BaseModel):
    month: str  # "2026-02"
    label: str  # "Feb 2026"


class CategoryLimitConfig(BaseModel):
    category: str
    limit_try: Decimal


DEFAULT_BUDGET_MONTHS = [
    BudgetMonthConfig(month="2026-02", label="Feb 2026"),
    BudgetMonthConfig(month="2026-03", label="Mar 2026"),
    BudgetMonthConfig(month="2026-04", label="Apr 2026"),
    BudgetMonthConfig(month="2026-05", label="May 2026"),
    BudgetMonthConfig(month="2026-06", label="Jun 2026"),
]

DEFAULT_CATEGORY_LIMITS = [
    CategoryLimitConfig(category="Housing", limit_try=Decimal("9000")),
    CategoryLimitConfig(category="Food", limit_try=Decimal("10000")),
    CategoryLimitConfig(category="Transport", limit_try=Decimal("2000")),
    CategoryLimitConfig(category="Utilities", limit_try=Decimal("1500")),
    CategoryLimitConfig(category="Lifestyle", limit_try=Decimal("2500")),
    CategoryLimitConfig(category="Debt", limit_try=Decimal("20000")),
    CategoryLimitConfig(category="Installment", limit_try=Decimal("2500")),
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_env: str = "development"
    app_debug: bool = True

    # Mock API server
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    # Remote FinTrack API
    api_base_url: str = "https://localhost:8443"
    api_prefix: str = "/api/v1"
    http_timeout: float = 10.0  # seconds per request

    # Market data
    usd_try_rate_url: str = (
        "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies/usd.json"
    )
    usd_try_fallback_rate: Decimal = Decimal("27.0")

    # Budgets (JSON lists when set through the environment)
    budget_months: list[BudgetMonthConfig] = DEFAULT_BUDGET_MONTHS
    category_limits: list[CategoryLimitConfig] = DEFAULT_CATEGORY_LIMITS
    default_salary_usd: Decimal = Decimal("1190")
    credit_card_limit_try: Decimal = Decimal("50000")

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @field_validator("api_base_url", "api_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def category_limit_map(self) -> dict[str, Decimal]:
        return {c.category: c.limit_try for c in self.category_limits}

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
