"""
Jupiter token list.

The full list is large; it is fetched in one request and filtered locally.
Jupiter carries no market data, so it mostly contributes decimals and
social links from the token's extensions.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from backend_x402.core.exceptions import SourceResponseError
from backend_x402.scanner.matching import select_matching
from backend_x402.scanner.models import Token, TokenCandidate
from backend_x402.scanner.sources.base import TokenSource, as_int, as_str, build_socials


def normalize_jupiter_token(item: Any) -> TokenCandidate | None:
    if not isinstance(item, dict):
        return None
    mint = as_str(item.get("address")) or as_str(item.get("id"))
    name = as_str(item.get("name"))
    symbol = as_str(item.get("symbol"))
    if not mint or not (name or symbol):
        return None
    ext = item.get("extensions")
    ext = ext if isinstance(ext, dict) else {}
    token = Token(
        name=name or symbol,
        symbol=symbol or name,
        mint_address=mint,
        decimals=as_int(item.get("decimals")),
        socials=build_socials(
            twitter=ext.get("twitter") or item.get("twitter"),
            telegram=ext.get("telegram") or item.get("telegram"),
            discord=ext.get("discord"),
            website=ext.get("website") or item.get("website"),
        ),
    )
    return TokenCandidate(token=token)


class JupiterSource(TokenSource):
    name = "jupiter"

    def __init__(self, search_terms: Sequence[str], *, url: str, timeout_sec: float = 10.0) -> None:
        super().__init__(search_terms, timeout_sec=timeout_sec)
        self._url = url

    async def fetch(self, client: httpx.AsyncClient) -> list[Token]:
        data = await self._get_json(client, self._url)
        if not isinstance(data, list):
            raise SourceResponseError(self.name, "expected a list of tokens")
        return select_matching((normalize_jupiter_token(t) for t in data), self._terms)
