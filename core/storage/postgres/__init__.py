"""PostgreSQL document storage.

Symbols and deals are stored as JSONB documents, one table per entity kind.

Notes
- We avoid logging connection URLs to prevent accidental secret leakage.
- Tables are created by ``PostgresStores.ensure_schema`` (see db/init_db.py).
"""

from .config import PostgresConfig
from .stores import PostgresStores
