#!/usr/bin/env python3
"""Initialize the database schema and optionally seed the starter set.

Creates the JSONB document tables for symbols and deals in the database
pointed to by DATABASE_URL.

Usage:
  python -m db.init_db [--seed]

Requirements:
  - DATABASE_URL must be set
  - SQLAlchemy and psycopg2 installed
"""

from __future__ import annotations

import argparse
import logging
import os

from core.storage import PostgresConfig, PostgresStores, seed_stores

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create symbol/deal tables and optionally seed starter data")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Wipe both collections and write the starter symbols and deals",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise SystemExit("DATABASE_URL is not set")

    stores = PostgresStores(config=PostgresConfig(database_url=database_url))
    stores.ensure_schema()
    logger.info("Database schema applied")

    if args.seed:
        seed_stores(symbols=stores, deals=stores)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
