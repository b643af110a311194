"""
Main entrypoint: FastAPI server for the 402 token discovery backend.

Env: API_HOST, API_PORT, BIRDEYE_API_KEY, X402_* (see backend_x402/config/env.py), LOG_LEVEL.

Equivalent: uvicorn backend_x402.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_x402.x402_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from backend_x402.config import get_settings
    from backend_x402.api_server.app import app
    import uvicorn

    settings = get_settings()
    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
