"""
Structured logging for the x402 backend.

Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_x402.x402_logging.logger import get_logger

__all__ = ["get_logger"]
