"""
Tests for the structlog setup: import safety and the event_type/timestamp processors.
"""

from __future__ import annotations


def test_get_logger_usable_at_import():
    """get_logger works without importing the scanner or API packages."""
    from backend_x402.x402_logging import get_logger

    logger = get_logger("tests.logging")
    logger.info("token_refresh_started", sources=["dexscreener", "pumpfun"])


def test_refresh_event_is_normalized():
    """A refresh event gets event_type, a message and an ISO timestamp; context keys pass through."""
    from backend_x402.x402_logging.logger import _add_timestamp, _normalize_event

    event = {"event": "source_fetch_failed", "source": "pumpfun", "error": "pumpfun: HTTP 429 (rate limited)"}
    out = _normalize_event(None, "warning", _add_timestamp(None, "warning", event))

    assert "event" not in out
    assert out["event_type"] == "source_fetch_failed"
    assert out["message"] == "source_fetch_failed"
    assert out["source"] == "pumpfun"
    assert "T" in out["timestamp"]


def test_explicit_timestamp_and_message_kept():
    """Caller-supplied timestamp and message are not overwritten."""
    from backend_x402.x402_logging.logger import _add_timestamp, _normalize_event

    event = {"event": "token_refresh_fallback", "timestamp": "fixed", "message": "primary down"}
    out = _normalize_event(None, "warning", _add_timestamp(None, "warning", event))
    assert out["timestamp"] == "fixed"
    assert out["message"] == "primary down"


def test_bind_source_logger():
    """bind_source returns a logger usable with extra keys."""
    from backend_x402.x402_logging.logger import bind_source

    logger = bind_source("dexscreener")
    logger.warning("dexscreener_term_failed", term="x402", error="timed out")
