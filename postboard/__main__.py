"""
Serve the postboard API.

Usage:
    python -m postboard [--db ./db.json] [--host localhost] [--port 8080]
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence

import uvicorn

from postboard.app import create_app
from postboard.core.config import get_settings
from postboard.core.logging import configure_logging
from postboard.repositories.errors import StoreError
from postboard.repositories.json_storage import ensure_store

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    ap = argparse.ArgumentParser(prog="postboard", description="Users and posts over a JSON file")
    ap.add_argument("--db", default=settings.db_path, help=f"store location (default: {settings.db_path})")
    ap.add_argument("--host", default=settings.host, help=f"bind address (default: {settings.host})")
    ap.add_argument("--port", type=int, default=settings.port, help=f"bind port (default: {settings.port})")
    ap.add_argument("--log-level", default=settings.log_level, help="logging level (default: %(default)s)")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    settings = replace(
        get_settings(),
        db_path=args.db,
        host=args.host,
        port=args.port,
        log_level=args.log_level.upper(),
    )
    try:
        store = ensure_store(settings.db_path)
    except StoreError as exc:
        logger.error("Cannot open store: %s", exc.message)
        return 1
    app = create_app(settings, store)
    logger.info("Serving %s on %s:%s", store.path, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
