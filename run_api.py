#!/usr/bin/env python
"""
Run the Noodle API server.

Command-line flags override the matching settings (HOST, PORT, RELOAD,
LOG_LEVEL) for a single run.

Usage:
    python run_api.py
    python run_api.py --reload --log-level debug
"""

import argparse
from typing import Optional, Sequence

import uvicorn

from shared.config import get_settings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Noodle API server")
    parser.add_argument("--host", help="Interface to bind (default: HOST)")
    parser.add_argument("--port", type=int, help="Port to bind (default: PORT)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Server log level (default: LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=args.log_level or settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
