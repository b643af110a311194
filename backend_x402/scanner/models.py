"""
Data models for scanner output.

Token is the wire contract toward the dashboard frontend (camelCase JSON).
TokenCandidate wraps a Token with source-local ranking data (liquidity) that
never leaves the source adapter.

Token and TokenSocials are frozen; merging builds new instances with model_copy.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

SOCIAL_KEYS = ("twitter", "telegram", "discord", "website")


class TokenSocials(BaseModel):
    """Social links for a token; every field optional."""

    model_config = ConfigDict(frozen=True)

    twitter: str | None = None
    telegram: str | None = None
    discord: str | None = None
    website: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, key) is None for key in SOCIAL_KEYS)


class Token(BaseModel):
    """
    A discovered token.

    Identity is the lowercased mint address (see mint_key). Serialize with
    to_wire() so optional fields are omitted instead of sent as null.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    symbol: str
    mint_address: str = Field(..., alias="mintAddress", min_length=1)
    decimals: int | None = None
    supply: str | None = None
    market_cap: float | None = Field(None, alias="marketCap")
    created_at: int | None = Field(None, alias="createdAt", description="Epoch milliseconds")
    socials: TokenSocials | None = None

    @property
    def mint_key(self) -> str:
        return self.mint_address.strip().lower()

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class TokenCandidate:
    """A normalized token plus the liquidity its source reported (USD, 0 when unknown)."""

    token: Token
    liquidity: float = 0.0
