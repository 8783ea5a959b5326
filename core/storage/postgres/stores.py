from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from decimal import InvalidOperation
from typing import Any, Callable, Iterator, Optional, Sequence, TypeVar

from core.errors import StorageError
from core.storage.postgres import documents
from core.storage.postgres.config import PostgresConfig
from core.types import Deal, TradingSymbol

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")

T = TypeVar("T")


class PostgresStores:
    """PostgreSQL-backed SymbolStore and DealStore.

    Each entity kind lives in its own table of JSONB documents keyed by the
    entity's primary key. Writes are single-statement upserts
    (``INSERT ... ON CONFLICT (id) DO UPDATE``), so every save is atomic for
    its document. There is no cross-document transaction.
    """

    def __init__(self, *, config: PostgresConfig) -> None:
        for table in (config.symbols_table, config.deals_table):
            if not _IDENTIFIER_RE.match(table):
                raise ValueError(f"Invalid table name: {table!r}")
        self._config = config
        self._engine: Any | None = None

    def _require_sqlalchemy(self) -> tuple[Any, Any]:
        try:
            from sqlalchemy import create_engine, text  # type: ignore[import-not-found]
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "SQLAlchemy is required for PostgresStores. Install it with: pip install SQLAlchemy psycopg2-binary"
            ) from exc

        return create_engine, text

    def _get_engine(self) -> Any:
        if self._engine is None:
            create_engine, _ = self._require_sqlalchemy()
            # Do not log the URL (it may contain secrets).
            self._engine = create_engine(self._config.database_url, echo=False, pool_pre_ping=True)
        return self._engine

    @contextmanager
    def _begin(self) -> Iterator[Any]:
        """Open a connection in its own transaction, translating driver failures."""
        try:
            with self._get_engine().begin() as conn:
                yield conn
        except StorageError:
            raise
        except Exception as exc:
            logger.error(f"Storage operation failed: {type(exc).__name__}")
            raise StorageError(f"storage failure: {type(exc).__name__}") from exc

    def _decode(self, decoder: Callable[[Any], T], raw: Any) -> T:
        try:
            return decoder(documents.loads(raw))
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise StorageError(f"cannot decode stored document: {exc}") from exc

    def ensure_schema(self) -> None:
        """Create both document tables if they do not exist yet."""
        _, text = self._require_sqlalchemy()

        with self._begin() as conn:
            for table in (self._config.symbols_table, self._config.deals_table):
                conn.execute(
                    text(
                        f"""
                        CREATE TABLE IF NOT EXISTS {table} (
                            id TEXT PRIMARY KEY,
                            doc JSONB NOT NULL
                        )
                        """
                    )
                )

    def ping(self) -> None:
        _, text = self._require_sqlalchemy()

        with self._begin() as conn:
            conn.execute(text("SELECT 1"))

    # ---- generic document helpers

    def _upsert(self, *, table: str, key: str, document: dict[str, Any]) -> None:
        _, text = self._require_sqlalchemy()

        stmt = text(
            f"""
            INSERT INTO {table} (id, doc)
            VALUES (:id, CAST(:doc AS JSONB))
            ON CONFLICT (id)
            DO UPDATE SET doc = EXCLUDED.doc
            """
        )

        with self._begin() as conn:
            conn.execute(stmt, {"id": key, "doc": documents.dumps(document)})

    def _fetch_all(self, *, table: str) -> Sequence[Any]:
        _, text = self._require_sqlalchemy()

        with self._begin() as conn:
            rows = conn.execute(text(f"SELECT doc FROM {table} ORDER BY id ASC")).fetchall()

        return [row[0] for row in rows]

    def _fetch_one(self, *, table: str, key: str) -> Any | None:
        _, text = self._require_sqlalchemy()

        with self._begin() as conn:
            row = conn.execute(text(f"SELECT doc FROM {table} WHERE id = :id"), {"id": key}).fetchone()

        return None if row is None else row[0]

    def _delete(self, *, table: str, key: str) -> None:
        _, text = self._require_sqlalchemy()

        with self._begin() as conn:
            conn.execute(text(f"DELETE FROM {table} WHERE id = :id"), {"id": key})

    # ---- SymbolStore

    def save_symbol(self, *, symbol: TradingSymbol) -> None:
        self._upsert(
            table=self._config.symbols_table,
            key=symbol.symbol,
            document=documents.symbol_to_document(symbol),
        )

    def get_symbols(self) -> Sequence[TradingSymbol]:
        raw_docs = self._fetch_all(table=self._config.symbols_table)
        return [self._decode(documents.symbol_from_document, raw) for raw in raw_docs]

    def get_symbol(self, *, symbol: str) -> Optional[TradingSymbol]:
        raw = self._fetch_one(table=self._config.symbols_table, key=symbol)
        if raw is None:
            return None
        return self._decode(documents.symbol_from_document, raw)

    def delete_symbol(self, *, symbol: str) -> None:
        self._delete(table=self._config.symbols_table, key=symbol)

    # ---- DealStore

    def save_deal(self, *, deal: Deal) -> None:
        self._upsert(
            table=self._config.deals_table,
            key=deal.id,
            document=documents.deal_to_document(deal),
        )

    def get_deals(self) -> Sequence[Deal]:
        raw_docs = self._fetch_all(table=self._config.deals_table)
        return [self._decode(documents.deal_from_document, raw) for raw in raw_docs]

    def get_deal(self, *, deal_id: str) -> Optional[Deal]:
        raw = self._fetch_one(table=self._config.deals_table, key=deal_id)
        if raw is None:
            return None
        return self._decode(documents.deal_from_document, raw)

    def delete_deal(self, *, deal_id: str) -> None:
        self._delete(table=self._config.deals_table, key=deal_id)
