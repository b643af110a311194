"""
Environment variable loading and parsing for the x402 backend.

- BIRDEYE_API_KEY: Birdeye API key (Birdeye source is skipped when unset)
- X402_SEARCH_TERMS: comma-separated search substrings (default: 402,x402,402x)
- X402_CACHE_TTL_SEC / X402_REQUEST_TIMEOUT_SEC / X402_TERM_DELAY_SEC / X402_PAGE_LIMIT
- *_URL: per-source endpoint overrides
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_x402/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SEARCH_TERMS = ("402", "x402", "402x")

DEXSCREENER_SEARCH_URL = "https://api.dexscreener.com/latest/dex/search"
PUMPFUN_COINS_URL = "https://frontend-api.pump.fun/coins"
BIRDEYE_TOKENLIST_URL = "https://public-api.birdeye.so/defi/tokenlist"
JUPITER_TOKENLIST_URL = "https://token.jup.ag/all"


def load_x402_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str = "") -> str:
    """Return stripped env value, or default when unset or blank."""
    raw = (os.getenv(name) or "").strip()
    return raw or default


def env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    """Parse a float env var; fall back to default when missing, invalid or below minimum."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value < minimum:
        return default
    return value


def env_int(name: str, default: int, *, minimum: int = 0) -> int:
    """Parse an int env var; fall back to default when missing, invalid or below minimum."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < minimum:
        return default
    return value


def get_search_terms() -> tuple[str, ...]:
    """
    Return X402_SEARCH_TERMS as a tuple of non-empty, de-duplicated terms.
    Default: 402, x402, 402x.
    """
    raw = (os.getenv("X402_SEARCH_TERMS") or "").strip()
    if not raw:
        return DEFAULT_SEARCH_TERMS
    terms: list[str] = []
    for part in raw.split(","):
        term = part.strip()
        if term and term.lower() not in (t.lower() for t in terms):
            terms.append(term)
    return tuple(terms) or DEFAULT_SEARCH_TERMS


def get_birdeye_api_key() -> str | None:
    """Return BIRDEYE_API_KEY, or None when unset."""
    key = (os.getenv("BIRDEYE_API_KEY") or "").strip()
    return key or None


def mask_secret(value: str | None) -> str:
    """Mask an API key for logging (first 4 chars kept)."""
    if not value:
        return ""
    if len(value) <= 4:
        return "***"
    return value[:4] + "***"
