"""Authentication API routes for the in-memory API.

Tokens are opaque random strings carried in HTTP-only cookies; there is
no signing or persistence.
"""

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status

from fintrack.api.deps import REFRESH_TOKEN_COOKIE, SessionStore, get_session_store
from fintrack.config import settings
from fintrack.core.security import ACCESS_TOKEN_COOKIE
from fintrack.schemas.user import AuthUser, UserLogin, UserRegister

router = APIRouter()


def _set_session_cookies(response: Response, access: str, refresh: str) -> None:
    secure = settings.app_env == "production"
    response.set_cookie(ACCESS_TOKEN_COOKIE, access, httponly=True, samesite="lax", secure=secure)
    response.set_cookie(REFRESH_TOKEN_COOKIE, refresh, httponly=True, samesite="lax", secure=secure)


@router.post("/login", response_model=AuthUser)
async def login(
    data: UserLogin,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Check credentials and start a cookie session."""
    user = store.users.get(data.username)
    if user is None or store.passwords.get(data.username) != data.password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    _set_session_cookies(response, *store.issue(user))
    return user


@router.post("/register", response_model=AuthUser, status_code=201)
async def register(
    data: UserRegister,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    if data.username in store.users:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already registered",
        )
    user = AuthUser(
        id=f"user-{len(store.users) + 1}",
        username=data.username,
        email=data.email,
        net_salary_usd=data.net_salary_usd,
    )
    store.users[user.username] = user
    store.passwords[user.username] = data.password
    _set_session_cookies(response, *store.issue(user))
    return user


@router.post("/refresh", status_code=204)
async def refresh(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
    store: SessionStore = Depends(get_session_store),
):
    """Rotate both cookies; 401 when the refresh token is unknown."""
    tokens = store.rotate(refresh_token or "")
    if tokens is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )
    _set_session_cookies(response, *tokens)


@router.post("/logout", status_code=204)
async def logout(
    response: Response,
    access_token: str | None = Cookie(default=None, alias=ACCESS_TOKEN_COOKIE),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
    store: SessionStore = Depends(get_session_store),
):
    store.revoke(access_token, refresh_token)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
