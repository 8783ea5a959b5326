"""Storage implementations of the persistence interfaces.

- MemoryStores: in-process dicts, for tests and local bootstrap.
- PostgresStores: JSONB documents in PostgreSQL via SQLAlchemy.

Both satisfy ``core.persistence.SymbolStore`` and ``DealStore`` structurally.
"""

from .memory_stores import MemoryStores
from .postgres import PostgresConfig, PostgresStores
from .seed import STARTER_DEALS, STARTER_SYMBOLS, seed_stores
