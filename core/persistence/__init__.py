"""Persistence interfaces.

These protocols define the persistence boundary. Managers depend only on them;
implementations live in ``core.storage`` (in-memory and PostgreSQL/JSONB).
"""

from .interfaces import DealStore, SymbolStore

__all__ = ["DealStore", "SymbolStore"]
