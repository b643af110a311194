"""
Backend x402 — token discovery backend for the 402 dashboard.

Aggregates Solana SPL tokens whose name or symbol matches "402"-style patterns
from several public market-data APIs, merges them into one list, and serves the
cached result over HTTP. Modular architecture with clear separation between
configuration, scanner (sources, merge, cache) and API server.
"""

__version__ = "0.1.0"
