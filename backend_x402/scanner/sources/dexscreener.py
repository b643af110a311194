"""
DexScreener pair search — primary source.

Queries /latest/dex/search once per search term, sequentially with a fixed
delay between terms to stay under the provider's rate limit. Pairs are
normalized to their base token; only Solana pairs are kept.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import httpx

from backend_x402.core.exceptions import SourceError, SourceResponseError
from backend_x402.scanner.matching import select_matching
from backend_x402.scanner.models import Token, TokenCandidate
from backend_x402.scanner.sources.base import (
    TokenSource,
    as_float,
    as_int,
    as_str,
    build_socials,
)
from backend_x402.x402_logging.logger import bind_source

logger = bind_source("dexscreener")

SOLANA_CHAIN_ID = "solana"


def _socials_from_info(info: Any) -> dict[str, Any]:
    links: dict[str, Any] = {}
    if not isinstance(info, dict):
        return links
    for item in info.get("socials") or []:
        if not isinstance(item, dict):
            continue
        kind = (as_str(item.get("type")) or as_str(item.get("platform")) or "").lower()
        if kind == "x":
            kind = "twitter"
        if kind in ("twitter", "telegram", "discord") and kind not in links:
            links[kind] = item.get("url")
    for item in info.get("websites") or []:
        if isinstance(item, dict) and item.get("url"):
            links["website"] = item.get("url")
            break
    return links


def normalize_dexscreener_pair(pair: Any) -> TokenCandidate | None:
    """Map one DexScreener pair to its base token; None for non-Solana or malformed pairs."""
    if not isinstance(pair, dict):
        return None
    if (as_str(pair.get("chainId")) or "").lower() != SOLANA_CHAIN_ID:
        return None
    base = pair.get("baseToken")
    if not isinstance(base, dict):
        return None
    mint = as_str(base.get("address"))
    name = as_str(base.get("name"))
    symbol = as_str(base.get("symbol"))
    if not mint or not (name or symbol):
        return None

    liquidity = pair.get("liquidity")
    liquidity_usd = as_float(liquidity.get("usd")) if isinstance(liquidity, dict) else None
    market_cap = as_float(pair.get("marketCap"))
    if market_cap is None:
        market_cap = as_float(pair.get("fdv"))

    token = Token(
        name=name or symbol,
        symbol=symbol or name,
        mint_address=mint,
        market_cap=market_cap,
        created_at=as_int(pair.get("pairCreatedAt")),
        socials=build_socials(**_socials_from_info(pair.get("info"))),
    )
    return TokenCandidate(token=token, liquidity=liquidity_usd or 0.0)


class DexScreenerSource(TokenSource):
    name = "dexscreener"

    def __init__(
        self,
        search_terms: Sequence[str],
        *,
        url: str,
        term_delay_sec: float = 1.0,
        timeout_sec: float = 10.0,
    ) -> None:
        super().__init__(search_terms, timeout_sec=timeout_sec)
        self._url = url
        self._term_delay_sec = max(0.0, term_delay_sec)

    async def _search(self, client: httpx.AsyncClient, term: str) -> list[Any]:
        data = await self._get_json(client, self._url, params={"q": term})
        if not isinstance(data, dict):
            raise SourceResponseError(self.name, "expected an object with 'pairs'")
        pairs = data.get("pairs") or []
        if not isinstance(pairs, list):
            raise SourceResponseError(self.name, "'pairs' is not a list")
        return pairs

    async def fetch(self, client: httpx.AsyncClient) -> list[Token]:
        """
        Run each search term in turn and union the pairs.

        A failing term is logged and skipped; the source fails only when every
        term fails.
        """
        pairs: list[Any] = []
        errors: list[str] = []
        for i, term in enumerate(self._terms):
            if i > 0 and self._term_delay_sec > 0:
                await asyncio.sleep(self._term_delay_sec)
            try:
                found = await self._search(client, term)
            except SourceError as e:
                logger.warning("dexscreener_term_failed", term=term, error=str(e))
                errors.append(f"{term}: {e.message}")
                continue
            logger.debug("dexscreener_term_fetched", term=term, pairs=len(found))
            pairs.extend(found)

        if self._terms and len(errors) == len(self._terms):
            raise SourceError(self.name, "all search terms failed (" + "; ".join(errors) + ")")
        return select_matching((normalize_dexscreener_pair(p) for p in pairs), self._terms)
