"""
Token scanner — multi-source aggregation of "402"-style Solana tokens.

Responsibilities:
- Query DexScreener, Pump.fun, Birdeye and Jupiter concurrently.
- Normalize each provider's payload into the common Token record.
- Deduplicate, merge by source priority, and cache the merged list.
"""

from backend_x402.scanner.aggregator import TokenAggregator
from backend_x402.scanner.cache import TokenCache
from backend_x402.scanner.models import Token, TokenSocials

__all__ = ["Token", "TokenAggregator", "TokenCache", "TokenSocials"]
