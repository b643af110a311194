"""
Multi-source token aggregation with stale-cache fallback.

Flow of one fetch_tokens() call:
- Fresh cache -> return it, no network.
- Otherwise fan out to every enabled source concurrently and settle all
  outcomes into SourceResults (a failing source never aborts the others).
- Primary source (first in priority order) failed -> stale cache or [].
- Else start from the primary's tokens and let secondaries enrich/insert,
  then replace the cache.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Sequence

import httpx

from backend_x402.scanner.cache import TokenCache
from backend_x402.scanner.models import SOCIAL_KEYS, Token, TokenSocials
from backend_x402.scanner.sources.base import TokenSource
from backend_x402.x402_logging import get_logger

logger = get_logger(__name__)

# Fields a secondary source may fill when the merged record lacks them.
ENRICHABLE_FIELDS = ("decimals", "supply", "market_cap", "created_at")


@dataclass(frozen=True)
class SourceResult:
    """Tagged outcome of one source fetch: success(tokens) | failure(error)."""

    source: str
    ok: bool
    tokens: list[Token] = field(default_factory=list)
    error: str | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def success(cls, source: str, tokens: list[Token], elapsed_ms: float = 0.0) -> "SourceResult":
        return cls(source=source, ok=True, tokens=list(tokens), elapsed_ms=elapsed_ms)

    @classmethod
    def failure(cls, source: str, error: BaseException | str, elapsed_ms: float = 0.0) -> "SourceResult":
        return cls(source=source, ok=False, error=str(error) or type(error).__name__, elapsed_ms=elapsed_ms)


@dataclass(frozen=True)
class SourceStatus:
    """Last-cycle diagnostic for one source (served by /api/sources)."""

    name: str
    primary: bool
    enabled: bool
    ok: bool | None = None
    count: int = 0
    error: str | None = None
    elapsed_ms: float | None = None
    fetched_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "primary": self.primary,
            "enabled": self.enabled,
            "ok": self.ok,
            "count": self.count,
            "error": self.error,
            "elapsedMs": self.elapsed_ms,
            "fetchedAt": self.fetched_at,
        }


async def settle_all(named: Sequence[tuple[str, Awaitable[list[Token]]]]) -> list[SourceResult]:
    """
    Await every (name, awaitable) concurrently; never raise.

    Each outcome becomes SourceResult.success or SourceResult.failure, in input order.
    """

    async def _timed(name: str, aw: Awaitable[list[Token]]) -> SourceResult:
        start = time.perf_counter()
        try:
            tokens = await aw
        except Exception as e:  # noqa: BLE001
            elapsed = (time.perf_counter() - start) * 1000
            return SourceResult.failure(name, e, elapsed)
        elapsed = (time.perf_counter() - start) * 1000
        return SourceResult.success(name, tokens, elapsed)

    return list(await asyncio.gather(*(_timed(name, aw) for name, aw in named)))


def _merge_socials(base: TokenSocials | None, extra: TokenSocials | None) -> TokenSocials | None:
    if extra is None or extra.is_empty():
        return base
    if base is None:
        return extra.model_copy()
    filled = {key: getattr(base, key) or getattr(extra, key) for key in SOCIAL_KEYS}
    return TokenSocials(**filled)


def enrich_token(base: Token, extra: Token) -> Token:
    """
    Return base with gaps filled from extra.

    Name, symbol, mint and every populated field stay as in base; socials are
    filled key by key.
    """
    updates: dict[str, Any] = {}
    for name in ENRICHABLE_FIELDS:
        if getattr(base, name) is None and getattr(extra, name) is not None:
            updates[name] = getattr(extra, name)
    socials = _merge_socials(base.socials, extra.socials)
    if socials is not base.socials:
        updates["socials"] = socials
    if not updates:
        return base
    return base.model_copy(update=updates)


def merge_tokens(primary: list[Token], secondaries: Sequence[list[Token]]) -> list[Token]:
    """
    Merge by lowercased mint: primary first, then each secondary in priority order.

    Known mints are enriched, unknown mints appended. Order: first appearance.
    """
    merged: dict[str, Token] = {}
    for token in primary:
        key = token.mint_key
        if key in merged:
            merged[key] = enrich_token(merged[key], token)
        else:
            merged[key] = token
    for tokens in secondaries:
        for token in tokens:
            key = token.mint_key
            if key in merged:
                merged[key] = enrich_token(merged[key], token)
            else:
                merged[key] = token
    return list(merged.values())


class TokenAggregator:
    """
    Aggregates tokens from prioritized sources into a cached merged list.

    sources[0] is primary: its success is required for a non-fallback result.
    The http client and cache are owned by the caller (API lifespan or CLI).
    """

    def __init__(
        self,
        sources: Sequence[TokenSource],
        cache: TokenCache,
        client: httpx.AsyncClient,
    ) -> None:
        if not sources:
            raise ValueError("sources must be non-empty")
        self._sources = list(sources)
        self._cache = cache
        self._client = client
        self._status: dict[str, SourceStatus] = {
            s.name: SourceStatus(name=s.name, primary=(i == 0), enabled=s.enabled)
            for i, s in enumerate(self._sources)
        }

    @property
    def primary(self) -> TokenSource:
        return self._sources[0]

    @property
    def cache(self) -> TokenCache:
        return self._cache

    @property
    def source_names(self) -> list[str]:
        return [s.name for s in self._sources]

    def source_statuses(self) -> list[SourceStatus]:
        return [self._status[s.name] for s in self._sources]

    async def fetch_tokens(self) -> list[Token]:
        """
        Return the current token list. Never raises.

        Fresh cache is returned as-is. On primary failure or any unexpected
        error, the stale cache (or []) is returned and the cache is untouched.
        """
        if self._cache.is_fresh():
            logger.debug("token_cache_hit", count=len(self._cache), age_sec=self._cache.age_sec())
            return self._cache.get()
        try:
            return await self._refresh()
        except Exception as e:  # noqa: BLE001
            logger.exception("token_refresh_failed", error=str(e))
            return self._fallback("unexpected_error")

    async def _refresh(self) -> list[Token]:
        active = [s for s in self._sources if s.enabled]
        skipped = [s.name for s in self._sources if not s.enabled]
        if skipped:
            logger.debug("sources_skipped_disabled", sources=skipped)
        logger.info("token_refresh_started", sources=[s.name for s in active])

        results = await settle_all([(s.name, s.fetch(self._client)) for s in active])
        self._record(results)
        by_name = {r.source: r for r in results}

        for r in results:
            if r.ok:
                logger.info("source_fetched", source=r.source, count=len(r.tokens), elapsed_ms=round(r.elapsed_ms, 1))
            else:
                logger.warning("source_fetch_failed", source=r.source, error=r.error, elapsed_ms=round(r.elapsed_ms, 1))

        primary = by_name.get(self.primary.name)
        if primary is None or not primary.ok:
            return self._fallback("primary_failed")

        secondaries = [
            by_name[s.name].tokens
            for s in self._sources[1:]
            if s.name in by_name and by_name[s.name].ok
        ]
        merged = merge_tokens(primary.tokens, secondaries)
        self._cache.set(merged)
        logger.info(
            "token_refresh_completed",
            count=len(merged),
            primary_count=len(primary.tokens),
            failed_sources=[r.source for r in results if not r.ok],
        )
        return self._cache.get()

    def _fallback(self, reason: str) -> list[Token]:
        stale = self._cache.get()
        logger.warning(
            "token_refresh_fallback",
            reason=reason,
            stale_count=len(stale),
            stale_age_sec=self._cache.age_sec(),
        )
        return stale

    def _record(self, results: Sequence[SourceResult]) -> None:
        now_ms = int(time.time() * 1000)
        for i, s in enumerate(self._sources):
            self._status[s.name] = SourceStatus(name=s.name, primary=(i == 0), enabled=s.enabled)
        for r in results:
            prev = self._status[r.source]
            self._status[r.source] = SourceStatus(
                name=r.source,
                primary=prev.primary,
                enabled=prev.enabled,
                ok=r.ok,
                count=len(r.tokens),
                error=r.error,
                elapsed_ms=round(r.elapsed_ms, 1),
                fetched_at=now_ms,
            )
