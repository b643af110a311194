"""
Shared source plumbing: HTTP GET with error mapping and value coercion helpers.

Every transport failure is translated into the SourceError taxonomy here so
adapters only deal with parsed JSON.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import httpx

from backend_x402.core.exceptions import (
    SourceError,
    SourceHTTPError,
    SourceResponseError,
    SourceTimeoutError,
)
from backend_x402.scanner.models import SOCIAL_KEYS, Token, TokenSocials

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "backend-x402/0.1 (+token discovery dashboard)",
}


class TokenSource:
    """Base class for a token data source. Subclasses implement fetch()."""

    name: str = "source"

    def __init__(self, search_terms: Sequence[str], *, timeout_sec: float = 10.0) -> None:
        self._terms = tuple(search_terms)
        self._timeout_sec = timeout_sec

    @property
    def enabled(self) -> bool:
        return True

    @property
    def search_terms(self) -> tuple[str, ...]:
        return self._terms

    async def fetch(self, client: httpx.AsyncClient) -> list[Token]:
        """Return matching, deduplicated tokens or raise SourceError."""
        raise NotImplementedError

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        merged_headers = dict(DEFAULT_HEADERS)
        if headers:
            merged_headers.update(headers)
        try:
            resp = await client.get(
                url, params=params, headers=merged_headers, timeout=self._timeout_sec
            )
        except httpx.TimeoutException as e:
            raise SourceTimeoutError(self.name, f"timed out after {self._timeout_sec}s") from e
        except httpx.HTTPError as e:
            raise SourceError(self.name, f"request failed: {e}") from e
        if resp.status_code < 200 or resp.status_code >= 300:
            raise SourceHTTPError(self.name, resp.status_code, resp.text[:200].strip())
        try:
            return resp.json()
        except ValueError as e:
            raise SourceResponseError(self.name, "response is not valid JSON") from e


# -----------------------------------------------------------------------------
# Coercion helpers shared by normalizers
# -----------------------------------------------------------------------------


def as_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(out):
        return None
    return out


def as_int(value: Any) -> int | None:
    num = as_float(value)
    if num is None:
        return None
    return int(num)


def as_url(value: Any) -> str | None:
    text = as_str(value)
    if text is None:
        return None
    if not text.startswith(("http://", "https://")):
        return None
    return text


def build_socials(**links: Any) -> TokenSocials | None:
    """TokenSocials from keyword links (non-URL values dropped); None when nothing usable."""
    clean = {key: as_url(links.get(key)) for key in SOCIAL_KEYS}
    socials = TokenSocials(**clean)
    return None if socials.is_empty() else socials


def format_supply(amount: float | None) -> str | None:
    """UI amount as a display string with thousands separators, e.g. '1,000,000,000'."""
    if amount is None or not math.isfinite(amount) or amount < 0:
        return None
    if amount == int(amount):
        return f"{int(amount):,}"
    return f"{amount:,.2f}"
