"""
Match predicate, mint normalization and within-source deduplication.

Pure functions, no shared state.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from backend_x402.scanner.models import Token, TokenCandidate


def normalize_mint(mint: str | None) -> str:
    """Identity key for a mint address: stripped and lowercased."""
    return (mint or "").strip().lower()


def matches_search_terms(name: str | None, symbol: str | None, terms: Sequence[str]) -> bool:
    """
    True when name OR symbol contains any search term, case-insensitively.

    Empty terms never match (an empty term would otherwise match everything).
    """
    haystacks = [(name or "").lower(), (symbol or "").lower()]
    for term in terms:
        needle = (term or "").strip().lower()
        if not needle:
            continue
        if any(needle in text for text in haystacks):
            return True
    return False


def token_matches(token: Token, terms: Sequence[str]) -> bool:
    return matches_search_terms(token.name, token.symbol, terms)


def dedupe_by_liquidity(candidates: Iterable[TokenCandidate]) -> list[TokenCandidate]:
    """
    Collapse candidates sharing a mint (case-insensitive) to the one with higher liquidity.

    Ties keep the first seen. Output keeps first-seen order of mints.
    """
    best: dict[str, TokenCandidate] = {}
    for cand in candidates:
        key = cand.token.mint_key
        if not key:
            continue
        current = best.get(key)
        if current is None or cand.liquidity > current.liquidity:
            best[key] = cand
    return list(best.values())


def select_matching(candidates: Iterable[TokenCandidate | None], terms: Sequence[str]) -> list[Token]:
    """Drop unparseable items, keep matching ones, dedupe by liquidity, return Tokens."""
    kept = [c for c in candidates if c is not None and token_matches(c.token, terms)]
    return [c.token for c in dedupe_by_liquidity(kept)]
