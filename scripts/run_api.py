#!/usr/bin/env python3
"""Run the FastAPI server for the trading-symbol service.

Usage:
    python scripts/run_api.py [--host HOST] [--port PORT]

Environment:
    USER_OPERATORS_LIST / USER_VIEWERS_LIST - comma-separated caller ids.
    STORAGE_BACKEND - "postgres" (default) or "memory".
    DATABASE_URL - PostgreSQL connection string (postgres backend).
    INIT_DB - "true" to seed the starter symbols and deals on startup.
    API_HOST / API_PORT - defaults for --host / --port.

Examples:
    python scripts/run_api.py
    STORAGE_BACKEND=memory INIT_DB=true python scripts/run_api.py --port 8000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure imports work when invoked as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from core.config import AppConfig  # noqa: E402
from core.errors import ConfigError  # noqa: E402

logger = logging.getLogger("gandalf")


def main() -> int:
    """Run the API server."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        config = AppConfig.from_env()
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1

    parser = argparse.ArgumentParser(description="Run the trading-symbol service API.")
    parser.add_argument(
        "--host",
        default=config.host,
        help=f"Host to bind to (default: {config.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"Port to bind to (default: {config.port})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    args = parser.parse_args()

    import uvicorn

    # Build stores and service before serving so connection errors fail fast.
    from api.main import _get_service

    _get_service()

    logger.info(f"gandalf started on {args.host}:{args.port} (storage: {config.storage_backend})")
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    logger.info("gandalf stopped")

    return 0


if __name__ == "__main__":
    sys.exit(main())
