#!/usr/bin/env python3
"""
kvhttp Server Entry Point

This is the main entry point for starting the kvhttp server.

Usage:
    python -m kvhttp.server                           # Default settings (127.0.0.1:8080)
    python -m kvhttp.server --port 9000               # Custom port
    python -m kvhttp.server --host 0.0.0.0            # Custom host
    python -m kvhttp.server --debug                   # Enable debug logging
    python -m kvhttp.server --missing-key-status 404  # Report missing keys as 404

Environment Variables:
    PORT                       - Server port (takes precedence over KVHTTP_PORT)
    KVHTTP_HOST                - Server bind address
    KVHTTP_PORT                - Server port
    KVHTTP_MISSING_KEY_STATUS  - Status for GET on a missing key
    KVHTTP_DEBUG               - Enable debug mode (true/false)
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .cache.store import KVStore
from .config.settings import settings
from .network.http_server import KVServer


def error_status(text: str) -> int:
    """argparse type for a 4xx or 5xx status code."""
    try:
        status = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid status code: {text!r}")
    if not 400 <= status <= 599:
        raise argparse.ArgumentTypeError(f"status must be 4xx or 5xx, got {status}")
    return status


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="kvhttp: In-Memory Key-Value Store over HTTP",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--host",
        type=str,
        default=settings.HOST,
        help="Host address to bind to",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help="Port number to listen on",
    )

    parser.add_argument(
        "--missing-key-status",
        type=error_status,
        default=settings.MISSING_KEY_STATUS,
        help="Status reported for GET on a key that was never set",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    env_port = os.getenv("PORT")
    if env_port:
        args.port = int(env_port)

    return args


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the server."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    store = KVStore()
    server = KVServer(
        host=args.host,
        port=args.port,
        store=store,
        missing_key_status=args.missing_key_status,
    )

    logger.info("Starting kvhttp server")
    logger.info(f"  Host: {args.host}")
    logger.info(f"  Port: {args.port}")
    logger.info(f"  Missing key status: {args.missing_key_status}")
    logger.info(f"  Debug: {args.debug}")

    # uvicorn installs its own SIGINT/SIGTERM handlers and returns on shutdown
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
