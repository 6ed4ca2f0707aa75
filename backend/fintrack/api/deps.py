"""Shared API dependencies for the in-memory API."""

import secrets
from functools import lru_cache

from fastapi import Cookie, Depends, HTTPException, status

from fintrack.config import settings
from fintrack.core.security import ACCESS_TOKEN_COOKIE
from fintrack.schemas.user import AuthUser
from fintrack.services import seed_data
from fintrack.services.budget_service import BudgetService
from fintrack.services.market_data_service import MarketDataService
from fintrack.services.transaction_service import InvestmentStore, TransactionService

REFRESH_TOKEN_COOKIE = "refresh_token"


class SessionStore:
    """Issued access/refresh tokens, keyed to the user they belong to."""

    def __init__(self):
        self.users: dict[str, AuthUser] = {seed_data.DEMO_USER.username: seed_data.DEMO_USER}
        self.passwords: dict[str, str] = {seed_data.DEMO_USER.username: seed_data.DEMO_PASSWORD}
        self.access_tokens: dict[str, str] = {}
        self.refresh_tokens: dict[str, str] = {}

    def issue(self, user: AuthUser) -> tuple[str, str]:
        access, refresh = secrets.token_urlsafe(24), secrets.token_urlsafe(24)
        self.access_tokens[access] = user.username
        self.refresh_tokens[refresh] = user.username
        return access, refresh

    def rotate(self, refresh_token: str) -> tuple[str, str] | None:
        username = self.refresh_tokens.pop(refresh_token, None)
        if username is None:
            return None
        return self.issue(self.users[username])

    def revoke(self, access_token: str | None, refresh_token: str | None) -> None:
        self.access_tokens.pop(access_token or "", None)
        self.refresh_tokens.pop(refresh_token or "", None)

    def user_for(self, access_token: str | None) -> AuthUser | None:
        username = self.access_tokens.get(access_token or "")
        return self.users.get(username) if username else None


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()


@lru_cache
def get_transaction_service() -> TransactionService:
    return TransactionService()


@lru_cache
def get_investment_store() -> InvestmentStore:
    return InvestmentStore()


@lru_cache
def get_market_data() -> MarketDataService:
    return MarketDataService(settings)


def get_budget_service() -> BudgetService:
    return BudgetService(settings)


async def get_current_user(
    access_token: str | None = Cookie(default=None, alias=ACCESS_TOKEN_COOKIE),
    store: SessionStore = Depends(get_session_store),
) -> AuthUser:
    user = store.user_for(access_token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return user


__all__ = [
    "get_current_user",
    "get_budget_service",
    "get_investment_store",
    "get_market_data",
    "get_session_store",
    "get_transaction_service",
]
