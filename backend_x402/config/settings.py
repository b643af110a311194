"""
Application settings.

Responsibilities:
- Build a typed Settings object from environment variables (after .env load).
- Provide defaults for every optional value so the service starts with no config.
- Expose get_settings() as the cached process-wide accessor.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from backend_x402.config.env import (
    BIRDEYE_TOKENLIST_URL,
    DEFAULT_SEARCH_TERMS,
    DEXSCREENER_SEARCH_URL,
    JUPITER_TOKENLIST_URL,
    PUMPFUN_COINS_URL,
    env_float,
    env_int,
    env_str,
    get_birdeye_api_key,
    get_search_terms,
    load_x402_env,
)

DEFAULT_CACHE_TTL_SEC = 300.0
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0
DEFAULT_TERM_DELAY_SEC = 1.0
DEFAULT_PAGE_LIMIT = 50


@dataclass(frozen=True)
class Settings:
    """Service configuration. Construct directly in tests; use get_settings() in the app."""

    search_terms: tuple[str, ...] = DEFAULT_SEARCH_TERMS
    cache_ttl_sec: float = DEFAULT_CACHE_TTL_SEC
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    term_delay_sec: float = DEFAULT_TERM_DELAY_SEC
    page_limit: int = DEFAULT_PAGE_LIMIT
    birdeye_api_key: str | None = field(default=None, repr=False)
    dexscreener_search_url: str = DEXSCREENER_SEARCH_URL
    pumpfun_coins_url: str = PUMPFUN_COINS_URL
    birdeye_tokenlist_url: str = BIRDEYE_TOKENLIST_URL
    jupiter_tokenlist_url: str = JUPITER_TOKENLIST_URL
    api_host: str = "0.0.0.0"
    api_port: int = 8000


def load_settings() -> Settings:
    """Read Settings from the environment (loads .env first)."""
    load_x402_env()
    return Settings(
        search_terms=get_search_terms(),
        cache_ttl_sec=env_float("X402_CACHE_TTL_SEC", DEFAULT_CACHE_TTL_SEC),
        request_timeout_sec=env_float(
            "X402_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC, minimum=0.1
        ),
        term_delay_sec=env_float("X402_TERM_DELAY_SEC", DEFAULT_TERM_DELAY_SEC),
        page_limit=env_int("X402_PAGE_LIMIT", DEFAULT_PAGE_LIMIT, minimum=1),
        birdeye_api_key=get_birdeye_api_key(),
        dexscreener_search_url=env_str("DEXSCREENER_SEARCH_URL", DEXSCREENER_SEARCH_URL),
        pumpfun_coins_url=env_str("PUMPFUN_COINS_URL", PUMPFUN_COINS_URL),
        birdeye_tokenlist_url=env_str("BIRDEYE_TOKENLIST_URL", BIRDEYE_TOKENLIST_URL),
        jupiter_tokenlist_url=env_str("JUPITER_TOKENLIST_URL", JUPITER_TOKENLIST_URL),
        api_host=env_str("API_HOST", "0.0.0.0"),
        api_port=env_int("API_PORT", 8000, minimum=1),
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings (cached for the process).

    Call get_settings.cache_clear() after changing the environment in tests.
    """
    return load_settings()
