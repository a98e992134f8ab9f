"""Serve the combined jobs endpoint.

Examples:
    python run_server.py
    python run_server.py --port 8080 --log-level DEBUG

Keys and the remaining settings come from the environment (or a .env file).
"""

from __future__ import annotations

import argparse

import uvicorn

from job_aggregator.config import load_settings
from job_aggregator.logger import setup_logger
from job_aggregator.server import create_app


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Serve GET /combined-jobs as an .xlsx download.")
    p.add_argument("--host", type=str, default=None, help="Host to bind (default: HOST or 127.0.0.1).")
    p.add_argument("--port", type=int, default=None, help="Port to bind (default: PORT or 3000).")
    p.add_argument("--log-level", type=str, default=None, help="Console log level (default: LOG_LEVEL or INFO).")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    settings = load_settings()
    setup_logger(args.log_level or settings.log_level, settings.log_file)

    app = create_app(settings)
    uvicorn.run(app, host=args.host or settings.host, port=args.port or settings.port)


if __name__ == "__main__":
    main()
