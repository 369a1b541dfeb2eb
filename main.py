#!/usr/bin/env python3
"""
CYN Portal -- login portal for the CYN Communication warehouse system.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --reload

Environment variables:
  PORT              Port to listen on (default 5000). --port overrides it.
  AUTH_SERVICE_URL  Base URL of the service exposing /api/auth/*.
  SECRET_KEY        Signs the portal session cookie (required unless DEBUG=true).
  DEBUG             Development mode; generates a throwaway SECRET_KEY.
"""

import argparse
import logging

import uvicorn

from core.config import get_settings

logger = logging.getLogger("cynportal.api")


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="cyn-portal",
        description="Serve the CYN portal login pages.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1).")
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port to listen on (default: $PORT or 5000).",
    )
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only).")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Server running on port %d", args.port)
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
