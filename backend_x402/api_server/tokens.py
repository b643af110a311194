"""
FastAPI router: GET /tokens, GET /sources (mounted under /api).

/tokens returns the aggregator's current list (cached, refreshed on expiry).
The aggregator never raises; anything that still escapes becomes a 500 with
{error, message}.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend_x402.scanner import TokenAggregator
from backend_x402.x402_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["tokens"])


class TokensErrorResponse(BaseModel):
    """500 body for GET /api/tokens."""

    error: str = Field(..., description="Short error summary")
    message: str = Field(..., description="Exception message or 'Unknown error'")


class SourcesResponse(BaseModel):
    """GET /api/sources response: cache state and last-cycle source outcomes."""

    priority: list[str] = Field(..., description="Source names, primary first")
    cache_size: int = Field(..., alias="cacheSize")
    cache_age_sec: float | None = Field(None, alias="cacheAgeSec")
    cache_ttl_sec: float = Field(..., alias="cacheTtlSec")
    cache_fresh: bool = Field(..., alias="cacheFresh")
    sources: list[dict[str, Any]] = Field(default_factory=list)


def get_aggregator(request: Request) -> TokenAggregator:
    """Dependency: process-wide aggregator created in the app lifespan."""
    return request.app.state.aggregator


@router.get(
    "/tokens",
    responses={500: {"model": TokensErrorResponse}},
)
async def get_tokens(aggregator: TokenAggregator = Depends(get_aggregator)) -> JSONResponse:
    """Return the current list of 402-style tokens as a JSON array."""
    logger.info("tokens_requested")
    try:
        tokens = await aggregator.fetch_tokens()
        return JSONResponse(status_code=200, content=[t.to_wire() for t in tokens])
    except Exception as e:
        logger.exception("tokens_request_failed", error=str(e))
        body = TokensErrorResponse(
            error="Failed to fetch tokens",
            message=str(e) or "Unknown error",
        )
        return JSONResponse(status_code=500, content=body.model_dump())


@router.get("/sources")
def get_sources(aggregator: TokenAggregator = Depends(get_aggregator)) -> JSONResponse:
    """Debug: cache age/size and the last aggregation outcome per source."""
    cache = aggregator.cache
    age = cache.age_sec()
    resp = SourcesResponse(
        priority=aggregator.source_names,
        cacheSize=len(cache),
        cacheAgeSec=round(age, 1) if age is not None else None,
        cacheTtlSec=cache.ttl_sec,
        cacheFresh=cache.is_fresh(),
        sources=[s.to_dict() for s in aggregator.source_statuses()],
    )
    return JSONResponse(status_code=200, content=resp.model_dump(by_alias=True))
