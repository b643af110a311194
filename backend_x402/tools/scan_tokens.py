"""
One-shot scan: run a single aggregation pass and print the merged token list.

Usage:
    python -m backend_x402.tools.scan_tokens            # JSON array on stdout
    python -m backend_x402.tools.scan_tokens --summary  # one line per token + source status
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import httpx

from backend_x402.config import get_settings
from backend_x402.scanner import TokenAggregator, TokenCache
from backend_x402.scanner.sources import build_sources


async def scan_once(summary: bool = False) -> int:
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.request_timeout_sec, follow_redirects=True) as client:
        aggregator = TokenAggregator(build_sources(settings), TokenCache(settings.cache_ttl_sec), client)
        tokens = await aggregator.fetch_tokens()

    if not summary:
        print(json.dumps([t.to_wire() for t in tokens], indent=2))
        return 0

    for status in aggregator.source_statuses():
        state = "skipped" if not status.enabled else ("ok" if status.ok else f"failed ({status.error})")
        print(f"[{status.name}{' *' if status.primary else ''}] {state} count={status.count}")
    print("Tokens found:", len(tokens))
    for t in tokens:
        mc = f"${t.market_cap:,.0f}" if t.market_cap is not None else "-"
        print(f"  {t.symbol:<12} {t.name[:32]:<32} {t.mint_address}  mc={mc}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Scan public APIs for 402-style Solana tokens.")
    parser.add_argument("--summary", action="store_true", help="Print a readable summary instead of JSON")
    args = parser.parse_args(argv)
    return asyncio.run(scan_once(summary=args.summary))


if __name__ == "__main__":
    sys.exit(main())
