"""Security utilities: credential policy and the login-redirect rule."""

import re

PASSWORD_MIN_LENGTH = 8
PASSWORD_RULES = {
    "uppercase": re.compile(r"[A-Z]"),
    "lowercase": re.compile(r"[a-z]"),
    "number": re.compile(r"[0-9]"),
    "symbol": re.compile(r"[^A-Za-z0-9]"),
}
PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters and include upper and lower case "
    "letters, a number and a symbol."
)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ACCESS_TOKEN_COOKIE = "access_token"
PUBLIC_ROUTES = ("/login", "/register")
# Paths the session guard never touches
EXEMPT_PREFIXES = (
    "/api",
    "/_next/static",
    "/_next/image",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/health",
)


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email.strip()))


def is_valid_password(password: str) -> bool:
    """Length >= 8 with at least one upper, lower, digit and symbol character."""
    return len(password) >= PASSWORD_MIN_LENGTH and all(
        rule.search(password) for rule in PASSWORD_RULES.values()
    )


def requires_login_redirect(path: str, access_token: str | None) -> str | None:
    """Return the path to redirect to, or None to let the request through.

    Unauthenticated requests to private pages go to /login; authenticated
    requests to /login or /register go home.
    """
    if any(path == p or path.startswith(p + "/") for p in EXEMPT_PREFIXES):
        return None

    is_public = path in PUBLIC_ROUTES
    if not access_token and not is_public:
        return "/login"
    if access_token and is_public:
        return "/"
    return None
