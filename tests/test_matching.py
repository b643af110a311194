"""
Pytest tests for the match predicate and within-source deduplication.
"""

from __future__ import annotations

from conftest import MINT_A, MINT_B

TERMS = ("402", "x402", "402x")


def test_match_predicate_name_or_symbol():
    """'Super402' by name and 'X402X' by symbol match; 'Bridge' does not."""
    from backend_x402.scanner.matching import matches_search_terms

    assert matches_search_terms("Super402", "SUP", TERMS) is True
    assert matches_search_terms("Something", "X402X", TERMS) is True
    assert matches_search_terms("Bridge", "BRG", TERMS) is False


def test_match_predicate_case_insensitive_and_empty_terms():
    """Terms match regardless of case; blank terms never match everything."""
    from backend_x402.scanner.matching import matches_search_terms

    assert matches_search_terms("pay x402 now", "", ("X402",)) is True
    assert matches_search_terms("Bridge", "BRG", ("", "  ")) is False
    assert matches_search_terms(None, None, TERMS) is False


def test_dedupe_keeps_higher_liquidity(make_token):
    """Same mint in different case collapses to the candidate with higher liquidity."""
    from backend_x402.scanner.matching import dedupe_by_liquidity
    from backend_x402.scanner.models import TokenCandidate

    low = TokenCandidate(make_token(mint=MINT_A, name="Low pool"), liquidity=1_000.0)
    high = TokenCandidate(make_token(mint=MINT_A.lower(), name="High pool"), liquidity=50_000.0)
    other = TokenCandidate(make_token(mint=MINT_B, name="Other 402"), liquidity=10.0)

    out = dedupe_by_liquidity([low, other, high])
    assert len(out) == 2
    assert out[0].token.name == "High pool"
    assert out[1].token.name == "Other 402"


def test_dedupe_tie_keeps_first_seen(make_token):
    """Equal liquidity keeps the first candidate."""
    from backend_x402.scanner.matching import dedupe_by_liquidity
    from backend_x402.scanner.models import TokenCandidate

    first = TokenCandidate(make_token(mint=MINT_A, name="First"), liquidity=5.0)
    second = TokenCandidate(make_token(mint=MINT_A, name="Second"), liquidity=5.0)

    out = dedupe_by_liquidity([first, second])
    assert [c.token.name for c in out] == ["First"]


def test_select_matching_filters_and_skips_none(make_token):
    """select_matching drops None items and non-matching tokens before dedup."""
    from backend_x402.scanner.matching import select_matching
    from backend_x402.scanner.models import TokenCandidate

    keep = TokenCandidate(make_token(mint=MINT_A, name="Super402", symbol="S402"))
    drop = TokenCandidate(make_token(mint=MINT_B, name="Bridge", symbol="BRG"))

    out = select_matching([None, keep, drop], TERMS)
    assert [t.mint_address for t in out] == [MINT_A]


def test_token_wire_shape(make_token):
    """to_wire uses camelCase keys and omits unset optional fields."""
    from backend_x402.scanner.models import TokenSocials

    token = make_token(market_cap=12_500.5, created_at=1_700_000_000_000, socials=TokenSocials(twitter="https://x.com/p402"))
    wire = token.to_wire()
    assert wire == {
        "name": "402 Protocol",
        "symbol": "402X",
        "mintAddress": MINT_A,
        "marketCap": 12_500.5,
        "createdAt": 1_700_000_000_000,
        "socials": {"twitter": "https://x.com/p402"},
    }
    assert token.mint_key == MINT_A.lower()
