"""Tests for the application factory: infrastructure routes, middleware,
and the outer error handlers wired around SQL-backed resources.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from src.elephant.api.middleware.logging import LoggingMiddleware
from src.elephant.api.rest.router import build_router
from src.elephant.config import get_settings
from src.elephant.core.errors import register_exception_handlers
from src.elephant.deals.service import DealService
from src.elephant.main import create_app
from src.elephant.passengers.service import PassengerService

from tests.doubles import InMemoryEntityService


@pytest.mark.asyncio
async def test_health_and_request_id():
    """GET /health -> 200, every response carries X-Request-ID."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_metrics_endpoint():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/health")
        response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_resource_routes_registered():
    paths = create_app().openapi()["paths"]

    for plural in ("deals", "passengers"):
        assert {"post", "put", "get"} <= set(paths[f"/api/{plural}"])
        assert {"get", "delete"} <= set(paths[f"/api/{plural}/{{id}}"])


# ── Request Logging ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_request_log_uses_route_template_and_caller_request_id():
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.include_router(
        build_router(
            deal_service=InMemoryEntityService(),
            passenger_service=InMemoryEntityService(),
        )
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        with capture_logs() as logs:
            response = await client.get("/api/deals/7", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "req-123"
    completed = [entry for entry in logs if entry["event"] == "request_completed"]
    assert len(completed) == 1
    assert completed[0]["route"].endswith("/{id}")
    assert completed[0]["path"] == "/api/deals/7"
    assert completed[0]["status_code"] == 404
    assert completed[0]["request_id"] == "req-123"
    assert completed[0]["log_level"] == "warning"


# ── CORS ─────────────────────────────────────────────────────────────────────


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_wildcard_cors_does_not_allow_credentials(fresh_settings, monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "*")
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health", headers={"Origin": "https://elsewhere.example"})

    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Access-Control-Allow-Credentials" not in response.headers


@pytest.mark.asyncio
async def test_explicit_cors_origin_allows_credentials(fresh_settings, monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://app.example.com")
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        allowed = await client.get("/health", headers={"Origin": "https://app.example.com"})
        other = await client.get("/health", headers={"Origin": "https://elsewhere.example"})

    assert allowed.headers["Access-Control-Allow-Origin"] == "https://app.example.com"
    assert allowed.headers["Access-Control-Allow-Credentials"] == "true"
    assert "Access-Control-Allow-Origin" not in other.headers


# ── SQL-backed Resources ─────────────────────────────────────────────────────


@pytest.fixture
def sql_app(sqlite_session_factory) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(
        build_router(
            deal_service=DealService(session_factory=sqlite_session_factory),
            passenger_service=PassengerService(session_factory=sqlite_session_factory),
        )
    )
    return app


@pytest.mark.asyncio
async def test_deal_lifecycle_against_database(sql_app):
    transport = ASGITransport(app=sql_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/api/deals", json={"id": None, "name": "Trip A"})
        updated = await client.put("/api/deals", json={"id": 1, "name": "Trip A2"})
        listed = await client.get("/api/deals?sort=name,desc")
        deleted = await client.delete("/api/deals/1")
        missing = await client.get("/api/deals/1")

    assert created.status_code == 201
    assert created.headers["Location"] == "/api/deals/1"
    assert updated.json()["name"] == "Trip A2"
    assert [d["name"] for d in listed.json()] == ["Trip A2"]
    assert listed.headers["X-Total-Count"] == "1"
    assert deleted.status_code == 200
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_unknown_id_then_creates_succeed(sql_app):
    """PUT with an unstored id takes a generated id, so later POSTs never collide."""
    transport = ASGITransport(app=sql_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        stray = await client.put("/api/deals", json={"id": 3, "name": "Stray"})
        created = [await client.post("/api/deals", json={"name": n}) for n in ("A", "B", "C")]

    assert stray.status_code == 200
    assert stray.json()["id"] == 1
    assert [r.status_code for r in created] == [201, 201, 201]
    assert [r.headers["Location"] for r in created] == [
        "/api/deals/2",
        "/api/deals/3",
        "/api/deals/4",
    ]


@pytest.mark.asyncio
async def test_out_of_range_ids_and_pages_are_client_errors(sql_app):
    transport = ASGITransport(app=sql_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        get = await client.get(f"/api/deals/{2**63}")
        put = await client.put("/api/deals", json={"id": 2**63, "name": "Overflow"})
        listed = await client.get("/api/deals", params={"page": 2**63 - 1, "size": 20})
        largest = await client.get(f"/api/deals/{2**63 - 1}")

    assert get.status_code == 422
    assert put.status_code == 422
    assert listed.status_code == 422
    assert largest.status_code == 404


@pytest.mark.asyncio
async def test_unknown_sort_property_is_bad_request(sql_app):
    transport = ASGITransport(app=sql_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/passengers?sort=shoe_size")

    assert response.status_code == 400
    assert "shoe_size" in response.json()["detail"]
