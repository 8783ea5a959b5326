"""Wiring: config -> stores -> gate + managers -> service."""

from __future__ import annotations

import logging
from typing import Optional, Union

from core.access import AccessGate
from core.config import AppConfig
from core.errors import ConfigError
from core.deals import DealLedger
from core.service import TradingService
from core.storage import MemoryStores, PostgresConfig, PostgresStores, seed_stores
from core.symbols import SymbolLifecycleManager

logger = logging.getLogger(__name__)

Stores = Union[MemoryStores, PostgresStores]


def build_stores(config: AppConfig) -> Stores:
    """Create the configured storage backend, ensuring schema and seed data."""
    if config.storage_backend == "memory":
        logger.info("Using in-memory storage")
        stores: Stores = MemoryStores()
    else:
        if not config.database_url:
            raise ConfigError("DATABASE_URL is required for the postgres backend")
        logger.info("Using PostgreSQL storage")
        stores = PostgresStores(config=PostgresConfig(database_url=config.database_url))
        stores.ensure_schema()

    if config.init_db:
        seed_stores(symbols=stores, deals=stores)

    return stores


def build_service(config: AppConfig, *, stores: Optional[Stores] = None) -> TradingService:
    stores = stores if stores is not None else build_stores(config)
    gate = AccessGate(operators=config.operators, viewers=config.viewers)
    logger.info(f"Access gate loaded: {len(gate.operators)} operators, {len(gate.viewers)} viewers")
    return TradingService(
        gate=gate,
        symbols=SymbolLifecycleManager(store=stores),
        deals=DealLedger(store=stores),
    )
