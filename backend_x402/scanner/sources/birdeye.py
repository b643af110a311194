"""
Birdeye token list (requires BIRDEYE_API_KEY).

Without a key the source reports enabled=False and the aggregator skips it.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from backend_x402.core.exceptions import SourceError, SourceResponseError
from backend_x402.scanner.matching import select_matching
from backend_x402.scanner.models import Token, TokenCandidate
from backend_x402.scanner.sources.base import TokenSource, as_float, as_int, as_str


def normalize_birdeye_token(item: Any) -> TokenCandidate | None:
    if not isinstance(item, dict):
        return None
    mint = as_str(item.get("address"))
    name = as_str(item.get("name"))
    symbol = as_str(item.get("symbol"))
    if not mint or not (name or symbol):
        return None
    market_cap = as_float(item.get("mc"))
    if market_cap is None:
        market_cap = as_float(item.get("marketCap"))
    token = Token(
        name=name or symbol,
        symbol=symbol or name,
        mint_address=mint,
        decimals=as_int(item.get("decimals")),
        market_cap=market_cap,
    )
    return TokenCandidate(token=token, liquidity=as_float(item.get("liquidity")) or 0.0)


class BirdeyeSource(TokenSource):
    name = "birdeye"

    def __init__(
        self,
        search_terms: Sequence[str],
        *,
        api_key: str | None,
        url: str,
        limit: int = 50,
        timeout_sec: float = 10.0,
    ) -> None:
        super().__init__(search_terms, timeout_sec=timeout_sec)
        self._api_key = api_key
        self._url = url
        self._limit = limit

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def fetch(self, client: httpx.AsyncClient) -> list[Token]:
        if not self._api_key:
            raise SourceError(self.name, "BIRDEYE_API_KEY not configured")
        params = {
            "sort_by": "v24hUSD",
            "sort_type": "desc",
            "offset": 0,
            "limit": self._limit,
        }
        headers = {"X-API-KEY": self._api_key, "x-chain": "solana"}
        data = await self._get_json(client, self._url, params=params, headers=headers)
        if not isinstance(data, dict):
            raise SourceResponseError(self.name, "expected an object")
        if data.get("success") is False:
            raise SourceResponseError(self.name, as_str(data.get("message")) or "success=false")
        inner = data.get("data")
        tokens = inner.get("tokens") if isinstance(inner, dict) else None
        if not isinstance(tokens, list):
            raise SourceResponseError(self.name, "missing data.tokens")
        return select_matching((normalize_birdeye_token(t) for t in tokens), self._terms)
