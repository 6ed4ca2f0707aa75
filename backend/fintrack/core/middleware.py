"""Application middleware: request logging and the login redirect guard."""

import time

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from fintrack.core.security import ACCESS_TOKEN_COOKIE, requires_login_redirect

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each incoming request with timing information."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response


class SessionGuardMiddleware(BaseHTTPMiddleware):
    """Send visitors without an access token to /login, and signed-in
    visitors away from /login and /register."""

    async def dispatch(self, request: Request, call_next):
        target = requires_login_redirect(
            request.url.path,
            request.cookies.get(ACCESS_TOKEN_COOKIE),
        )
        if target is not None:
            return RedirectResponse(url=str(request.url.replace(path=target, query="")), status_code=307)
        return await call_next(request)
