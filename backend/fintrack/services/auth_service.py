"""Authentication service: login/register/sign-out and refresh-aware requests.

Tokens live in HTTP-only cookies held by the shared ``httpx.AsyncClient``;
the profile of the signed-in user lives in an explicit ``AuthSession``.
"""

import asyncio
from decimal import Decimal
from typing import Any

import httpx
import pydantic
import structlog

from fintrack.config import Settings, settings
from fintrack.core.exceptions import RequestFailed, ValidationError
from fintrack.schemas.user import AuthUser, UserLogin, UserRegister

logger = structlog.get_logger()


class AuthSession:
    """Profile of the signed-in user.

    Created on login/register, cleared on sign-out or when a token
    refresh fails.
    """

    def __init__(self, user: AuthUser | None = None):
        self.current_user = user

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def persist(self, user: AuthUser) -> None:
        self.current_user = user

    def clear(self) -> None:
        self.current_user = None


def _first_error(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    return str(cause) if cause is not None else error["msg"]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Request failed."
    if not isinstance(body, dict):
        return "Request failed."
    return body.get("message") or body.get("error") or "Request failed."


class AuthClient:
    def __init__(
        self,
        config: Settings = settings,
        session: AuthSession | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.session = session or AuthSession()
        self.http = http_client or httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.http_timeout,
        )
        self._refresh_task: asyncio.Task[bool] | None = None

    async def __aenter__(self) -> "AuthClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    def auth_url(self, path: str) -> str:
        return f"{self.config.api_prefix}/auth/{path.lstrip('/')}"

    # ── Session lifecycle ─────────────────────────────

    async def _submit_credentials(self, path: str, payload: dict) -> AuthUser:
        response = await self.http.post(self.auth_url(path), json=payload)
        if not response.is_success:
            message = _error_message(response)
            logger.info("auth_rejected", path=path, status=response.status_code)
            raise RequestFailed(message, status_code=response.status_code)

        user = AuthUser.model_validate(response.json())
        self.session.persist(user)
        logger.info("auth_session_started", user_id=user.id)
        return user

    async def login(self, username: str, password: str) -> AuthUser:
        try:
            data = UserLogin(username=username, password=password)
        except pydantic.ValidationError as e:
            raise ValidationError(_first_error(e)) from None
        return await self._submit_credentials("login", data.model_dump(mode="json", by_alias=True))

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        net_salary_usd: Decimal | float,
    ) -> AuthUser:
        try:
            data = UserRegister(
                username=username,
                email=email,
                password=password,
                net_salary_usd=net_salary_usd,
            )
        except pydantic.ValidationError as e:
            raise ValidationError(_first_error(e)) from None
        payload = data.model_dump(mode="json", by_alias=True)
        payload["netSalaryUsd"] = float(data.net_salary_usd)
        return await self._submit_credentials("register", payload)

    async def sign_out(self) -> None:
        """Best-effort server logout; the local session is always cleared."""
        try:
            await self.http.post(self.auth_url("logout"))
        except httpx.HTTPError as e:
            logger.warning("logout_request_failed", error=str(e))
        self.session.clear()

    # ── Token refresh ─────────────────────────────────

    async def _refresh(self) -> bool:
        try:
            response = await self.http.post(self.auth_url("refresh"))
        except httpx.HTTPError as e:
            logger.warning("token_refresh_unreachable", error=str(e))
            response = None

        if response is None or not response.is_success:
            logger.info(
                "token_refresh_failed",
                status=response.status_code if response is not None else None,
            )
            await self.sign_out()
            return False

        # The refresh endpoint answers 204 and rotates the cookies
        logger.info("token_refreshed")
        return True

    def _release_refresh(self, task: asyncio.Task) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

    async def refresh_access_token(self) -> bool:
        """Refresh the access token, sharing one in-flight call between callers."""
        if self._refresh_task is None:
            self._refresh_task = asyncio.create_task(self._refresh())
            self._refresh_task.add_done_callback(self._release_refresh)
        return await asyncio.shield(self._refresh_task)

    # ── Authenticated requests ────────────────────────

    async def auth_fetch(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: dict | None = None,
        retry: bool = True,
    ) -> httpx.Response:
        """Send a request with the session cookies.

        A 401 triggers one token refresh and one retry. If the refresh
        fails, the original 401 response is returned.
        """
        response = await self.http.request(method, path, json=json, params=params)

        if response.status_code == httpx.codes.UNAUTHORIZED and retry:
            logger.info("access_token_rejected", path=path)
            if not await self.refresh_access_token():
                return response
            return await self.auth_fetch(path, method, json=json, params=params, retry=False)

        return response
