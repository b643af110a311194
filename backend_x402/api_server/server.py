"""
FastAPI server — token list API for the 402 dashboard.

Exposes GET /api/tokens (merged, cached token list), GET /api/sources (source
diagnostics) and GET /health. The aggregator, its cache and the shared
httpx client are created once in the lifespan. Config via env (see config.env).
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from backend_x402.api_server.tokens import router as tokens_router
from backend_x402.config import Settings, get_settings
from backend_x402.config.env import mask_secret
from backend_x402.scanner import TokenAggregator, TokenCache
from backend_x402.scanner.sources import build_sources
from backend_x402.x402_logging import get_logger

logger = get_logger(__name__)


def build_aggregator(settings: Settings, client: httpx.AsyncClient) -> TokenAggregator:
    """Wire sources (priority order) and a fresh cache around the given client."""
    cache = TokenCache(settings.cache_ttl_sec)
    return TokenAggregator(build_sources(settings), cache, client)


# -----------------------------------------------------------------------------
# Lifespan: one http client + one aggregator per process
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    client = httpx.AsyncClient(
        timeout=settings.request_timeout_sec,
        follow_redirects=True,
    )
    app.state.aggregator = build_aggregator(settings, client)
    logger.info(
        "api_aggregator_ready",
        sources=app.state.aggregator.source_names,
        search_terms=list(settings.search_terms),
        cache_ttl_sec=settings.cache_ttl_sec,
        birdeye_key=mask_secret(settings.birdeye_api_key) or None,
    )
    try:
        yield
    finally:
        await client.aclose()
        logger.info("api_http_client_closed")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="x402 Token Discovery API",
    description="Solana tokens matching 402-style patterns, aggregated from Jupiter, DexScreener, Birdeye and Pump.fun.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(tokens_router, prefix="/api")


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}
