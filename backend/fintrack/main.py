"""FinTrack API (in-memory variant): main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.config import settings
from fintrack.core.envelope import error_envelope
from fintrack.core.exceptions import FinTrackError
from fintrack.core.middleware import RequestLoggingMiddleware, SessionGuardMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting FinTrack API", env=settings.app_env)
    yield
    logger.info("Shutting down FinTrack API")


app = FastAPI(
    title="FinTrack API",
    description="Personal finance tracking API backed by in-memory demo data",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# ── Middleware ─────────────────────────────────────
app.add_middleware(SessionGuardMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Error envelopes ───────────────────────────────
@app.exception_handler(FinTrackError)
async def fintrack_error_handler(request: Request, exc: FinTrackError):
    logger.info("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, request.url.path),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail), request.url.path),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Validation error"
    if errors:
        cause = errors[0].get("ctx", {}).get("error")
        message = str(cause) if cause is not None else errors[0].get("msg", message)
    return JSONResponse(
        status_code=422,
        content=error_envelope(message, request.url.path),
    )


# ── Health Check ──────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness probe: healthy whenever the process is running."""
    return {"status": "healthy", "version": "0.1.0"}


# ── API Routes ────────────────────────────────────
from fintrack.api.v1 import auth, budgets, investments, metadata, transactions  # noqa: E402

app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(metadata.router, prefix="/api/v1/metadata", tags=["metadata"])
app.include_router(metadata.market_router, prefix="/api/v1/market-data", tags=["market-data"])
app.include_router(budgets.router, prefix="/api/v1/budgets", tags=["budgets"])
app.include_router(budgets.dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
app.include_router(budgets.reports_router, prefix="/api/v1/reports", tags=["reports"])
app.include_router(investments.router, prefix="/api/v1/investments", tags=["investments"])
