"""
Pytest fixtures for x402 backend tests.

Outbound HTTP is served by httpx.MockTransport; no test touches the network.
Async code is driven with asyncio.run from plain sync tests.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

MINT_A = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
MINT_B = "8yKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsV"
MINT_C = "9zKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsW"


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch):
    """Isolate tests from the developer's environment and the settings cache."""
    for name in (
        "BIRDEYE_API_KEY",
        "X402_SEARCH_TERMS",
        "X402_CACHE_TTL_SEC",
        "X402_REQUEST_TIMEOUT_SEC",
        "X402_TERM_DELAY_SEC",
        "X402_PAGE_LIMIT",
        "DEXSCREENER_SEARCH_URL",
        "PUMPFUN_COINS_URL",
        "BIRDEYE_TOKENLIST_URL",
        "JUPITER_TOKENLIST_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    from backend_x402.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_token() -> Callable[..., Any]:
    """Factory for Token with sensible defaults; keyword args override."""
    from backend_x402.scanner.models import Token

    def _make(mint: str = MINT_A, name: str = "402 Protocol", symbol: str = "402X", **kw: Any) -> Token:
        return Token(name=name, symbol=symbol, mint_address=mint, **kw)

    return _make


@pytest.fixture
def mock_http():
    """
    Factory: mock_http(handler) -> httpx.AsyncClient routed to handler.

    The returned client records every request in client.requests_seen.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        seen: list[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_recording))
        client.requests_seen = seen  # type: ignore[attr-defined]
        return client

    return _make
