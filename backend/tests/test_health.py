"""Health check and session guard tests."""

import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_private_page_redirects_to_login(client):
    response = await client.get("/dashboard?month=3")
    assert response.status_code == 307
    assert response.headers["location"] == "http://test/login"


@pytest.mark.asyncio
async def test_signed_in_user_leaves_login_page(demo_client):
    response = await demo_client.get("/login")
    assert response.status_code == 307
    assert response.headers["location"] == "http://test/"


@pytest.mark.asyncio
async def test_api_routes_are_not_redirected(client):
    response = await client.get("/api/v1/transactions")
    assert response.status_code == 401


def test_server_entry_point_runs_the_app(monkeypatch):
    import uvicorn

    from fintrack.__main__ import main
    from fintrack.config import settings

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    main()

    assert calls == [
        (
            "fintrack.main:app",
            {"host": settings.server_host, "port": settings.server_port, "reload": settings.app_debug},
        )
    ]
