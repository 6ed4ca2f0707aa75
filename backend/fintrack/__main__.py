"""Serve the in-memory FinTrack API: ``python -m fintrack``."""

import uvicorn

from fintrack.config import settings


def main() -> None:
    uvicorn.run(
        "fintrack.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.app_debug,
    )


if __name__ == "__main__":
    main()
