"""
Data source adapters.

One module per provider, each exposing a pure normalize_* function (native
payload item -> TokenCandidate) and a source class with async fetch().
"""

from __future__ import annotations

from backend_x402.config import Settings
from backend_x402.scanner.sources.base import TokenSource
from backend_x402.scanner.sources.birdeye import BirdeyeSource
from backend_x402.scanner.sources.dexscreener import DexScreenerSource
from backend_x402.scanner.sources.jupiter import JupiterSource
from backend_x402.scanner.sources.pumpfun import PumpFunSource

__all__ = [
    "BirdeyeSource",
    "DexScreenerSource",
    "JupiterSource",
    "PumpFunSource",
    "TokenSource",
    "build_sources",
]


def build_sources(settings: Settings) -> list[TokenSource]:
    """
    Sources in priority order; the first one is primary.

    DexScreener > Pump.fun > Birdeye > Jupiter.
    """
    return [
        DexScreenerSource(
            settings.search_terms,
            url=settings.dexscreener_search_url,
            term_delay_sec=settings.term_delay_sec,
            timeout_sec=settings.request_timeout_sec,
        ),
        PumpFunSource(
            settings.search_terms,
            url=settings.pumpfun_coins_url,
            limit=settings.page_limit,
            timeout_sec=settings.request_timeout_sec,
        ),
        BirdeyeSource(
            settings.search_terms,
            api_key=settings.birdeye_api_key,
            url=settings.birdeye_tokenlist_url,
            limit=settings.page_limit,
            timeout_sec=settings.request_timeout_sec,
        ),
        JupiterSource(
            settings.search_terms,
            url=settings.jupiter_tokenlist_url,
            timeout_sec=settings.request_timeout_sec,
        ),
    ]
