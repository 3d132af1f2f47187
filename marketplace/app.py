"""Command that wires storage, services and the web interface and serves it."""

from __future__ import annotations

import argparse
import os
import sys

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from marketplace.api import create_app
from marketplace.services import ProductService, SellerService
from marketplace.storage import (
    SqlProductRepository,
    SqlSellerRepository,
    connect,
    create_schema,
)

DEFAULT_DSN = "sqlite:///marketplace.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def build_app(dsn: str) -> Flask:
    """Connect to ``dsn``, create missing tables and return the web application."""
    engine = connect(dsn)
    create_schema(engine)
    seller_repository = SqlSellerRepository(engine)
    product_repository = SqlProductRepository(engine)
    return create_app(
        ProductService(product_repository, seller_repository),
        SellerService(seller_repository),
    )


def main(argv: list[str] | None = None) -> int:
    """Serve the marketplace API; return the process exit status."""
    parser = argparse.ArgumentParser(prog="marketplace", description="Marketplace HTTP API.")
    parser.add_argument(
        "--dsn",
        default=os.environ.get("MARKETPLACE_DSN", DEFAULT_DSN),
        help="database URL (default: $MARKETPLACE_DSN or %(default)s)",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        app = build_app(args.dsn)
    except SQLAlchemyError as exc:
        print(f"Failed to connect to database: {exc}", file=sys.stderr)
        return 1

    try:
        app.run(host=args.host, port=args.port)
    except OSError as exc:
        print(f"Failed to start server: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())