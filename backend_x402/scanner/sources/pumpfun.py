"""
Pump.fun coin list.

Fetches the newest coins (sorted by creation time) in a single request and
keeps those matching the search terms. Pump.fun mints always use 6 decimals.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from backend_x402.core.exceptions import SourceResponseError
from backend_x402.scanner.matching import select_matching
from backend_x402.scanner.models import Token, TokenCandidate
from backend_x402.scanner.sources.base import (
    TokenSource,
    as_float,
    as_int,
    as_str,
    build_socials,
    format_supply,
)

PUMPFUN_DECIMALS = 6


def normalize_pumpfun_coin(coin: Any) -> TokenCandidate | None:
    if not isinstance(coin, dict):
        return None
    mint = as_str(coin.get("mint"))
    name = as_str(coin.get("name"))
    symbol = as_str(coin.get("symbol"))
    if not mint or not (name or symbol):
        return None

    raw_supply = as_float(coin.get("total_supply"))
    supply = format_supply(raw_supply / 10**PUMPFUN_DECIMALS) if raw_supply is not None else None
    market_cap = as_float(coin.get("usd_market_cap"))

    token = Token(
        name=name or symbol,
        symbol=symbol or name,
        mint_address=mint,
        decimals=PUMPFUN_DECIMALS,
        supply=supply,
        market_cap=market_cap,
        created_at=as_int(coin.get("created_timestamp")),
        socials=build_socials(
            twitter=coin.get("twitter"),
            telegram=coin.get("telegram"),
            website=coin.get("website"),
        ),
    )
    # Bonding-curve coins report no pool liquidity; real SOL reserves stand in.
    liquidity = as_float(coin.get("real_sol_reserves")) or 0.0
    return TokenCandidate(token=token, liquidity=liquidity)


class PumpFunSource(TokenSource):
    name = "pumpfun"

    def __init__(
        self,
        search_terms: Sequence[str],
        *,
        url: str,
        limit: int = 50,
        timeout_sec: float = 10.0,
    ) -> None:
        super().__init__(search_terms, timeout_sec=timeout_sec)
        self._url = url
        self._limit = limit

    async def fetch(self, client: httpx.AsyncClient) -> list[Token]:
        params = {
            "offset": 0,
            "limit": self._limit,
            "sort": "created_timestamp",
            "order": "desc",
            "includeNsfw": "false",
        }
        data = await self._get_json(client, self._url, params=params)
        if isinstance(data, dict):
            data = data.get("coins")
        if not isinstance(data, list):
            raise SourceResponseError(self.name, "expected a list of coins")
        return select_matching((normalize_pumpfun_coin(c) for c in data), self._terms)
