"""
Pytest tests for the HTTP layer: GET /api/tokens, GET /api/sources, GET /health.

The aggregator dependency is overridden with fakes; the lifespan test builds the
real wiring without making outbound calls.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import MINT_A, MINT_B


class StubAggregator:
    def __init__(self, tokens=None, error=None):
        from backend_x402.scanner import TokenCache

        self.tokens = list(tokens or [])
        self.error = error
        self.cache = TokenCache(300)
        self.source_names = ["dexscreener", "pumpfun"]

    async def fetch_tokens(self):
        if self.error is not None:
            raise self.error
        return self.tokens

    def source_statuses(self):
        from backend_x402.scanner.aggregator import SourceStatus

        return [
            SourceStatus(name="dexscreener", primary=True, enabled=True, ok=True, count=2),
            SourceStatus(name="pumpfun", primary=False, enabled=True, ok=False, error="pumpfun: HTTP 429 (rate limited)"),
        ]


@pytest.fixture
def api():
    """TestClient with a swappable aggregator; overrides are cleared afterwards."""
    from backend_x402.api_server.server import app
    from backend_x402.api_server.tokens import get_aggregator

    holder = {"agg": StubAggregator()}
    app.dependency_overrides[get_aggregator] = lambda: holder["agg"]
    client = TestClient(app)
    client.holder = holder
    yield client
    app.dependency_overrides.clear()


def test_get_tokens_returns_wire_array(api, make_token):
    """200 with camelCase Token objects; unset optional fields are omitted."""
    from backend_x402.scanner.models import TokenSocials

    api.holder["agg"] = StubAggregator([
        make_token(mint=MINT_A, decimals=9, supply="1,000,000,000", socials=TokenSocials(website="https://402protocol.com")),
        make_token(mint=MINT_B, name="X402 Finance", symbol="X402", market_cap=5000.0, created_at=1_700_000_000_000),
    ])
    r = api.get("/api/tokens")
    assert r.status_code == 200
    data = r.json()
    assert data == [
        {
            "name": "402 Protocol",
            "symbol": "402X",
            "mintAddress": MINT_A,
            "decimals": 9,
            "supply": "1,000,000,000",
            "socials": {"website": "https://402protocol.com"},
        },
        {
            "name": "X402 Finance",
            "symbol": "X402",
            "mintAddress": MINT_B,
            "marketCap": 5000.0,
            "createdAt": 1_700_000_000_000,
        },
    ]


def test_get_tokens_empty_list(api):
    """Total failure upstream surfaces as 200 []."""
    r = api.get("/api/tokens")
    assert r.status_code == 200
    assert r.json() == []


def test_get_tokens_unexpected_exception_is_500(api):
    """Anything escaping the aggregator becomes 500 {error, message}."""
    api.holder["agg"] = StubAggregator(error=RuntimeError("cache corrupted"))
    r = api.get("/api/tokens")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch tokens", "message": "cache corrupted"}


def test_get_sources_reports_status(api):
    """/api/sources lists priority, cache state and per-source outcomes."""
    r = api.get("/api/sources")
    assert r.status_code == 200
    data = r.json()
    assert data["priority"] == ["dexscreener", "pumpfun"]
    assert data["cacheSize"] == 0
    assert data["cacheFresh"] is False
    assert data["cacheTtlSec"] == 300.0
    by_name = {s["name"]: s for s in data["sources"]}
    assert by_name["dexscreener"]["primary"] is True
    assert by_name["pumpfun"]["ok"] is False
    assert "429" in by_name["pumpfun"]["error"]


def test_health(api):
    r = api.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_lifespan_wires_aggregator(monkeypatch):
    """Startup builds the aggregator from settings: priority order, Birdeye disabled without key."""
    from backend_x402.api_server.server import app

    monkeypatch.setenv("X402_CACHE_TTL_SEC", "120")
    with TestClient(app) as client:
        agg = app.state.aggregator
        assert agg.source_names == ["dexscreener", "pumpfun", "birdeye", "jupiter"]
        assert agg.cache.ttl_sec == 120.0
        r = client.get("/api/sources")
        assert r.status_code == 200
        statuses = {s["name"]: s for s in r.json()["sources"]}
        assert statuses["birdeye"]["enabled"] is False
        assert statuses["dexscreener"]["primary"] is True


def test_unknown_route_uses_default_404(api):
    """No custom HTTPException handler is installed; unknown paths get FastAPI's default body."""
    from fastapi import HTTPException

    from backend_x402.api_server.server import app

    assert HTTPException not in app.exception_handlers
    r = api.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"detail": "Not Found"}
