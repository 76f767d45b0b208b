#!/usr/bin/env python3
"""
StockRoom -- in-memory product catalog behind JWT bearer authentication.

Usage:
  python main.py serve
  python main.py serve --port 8080
  python main.py serve --host 127.0.0.1 --reload

Environment variables:
  SECRET_KEY      Token signing key, at least 32 characters. Required unless DEBUG=true.
  PORT            Listen port (default: 3000).
  JWT_EXPIRES_IN  Token lifetime, e.g. "1h", "30m", "7d" (default: 1h).
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="stockroom",
        description="User registration/login and a protected product catalog over HTTP.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  SECRET_KEY=... python main.py serve
  DEBUG=true python main.py serve --reload
  PORT=8080 JWT_EXPIRES_IN=15m python main.py serve
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: HOST setting, 0.0.0.0)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: PORT setting, 3000)",
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (development only)",
    )
    args = parser.parse_args()

    # Fail fast on a bad SECRET_KEY or JWT_EXPIRES_IN before uvicorn starts
    settings = get_settings()

    if args.command == "serve":
        uvicorn.run(
            "api.main:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )


if __name__ == "__main__":
    main()
