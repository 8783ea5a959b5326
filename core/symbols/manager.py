"""Symbol lifecycle manager.

Owns the per-symbol status state machine plus limit and balance bookkeeping:

    (absent) --prepare--> PREPARING --start/resume--> ACTIVE
    ACTIVE --suspend--> SUSPENDED --resume/start--> ACTIVE
    PREPARING | ACTIVE | SUSPENDED --stop--> (absent)

start/resume/suspend only require the symbol to exist; the prior status is not
checked. Authorization is the caller's job (see core.service).
"""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal
from typing import Iterable, Sequence

from core.errors import AlreadyTrading, SymbolNotFound
from core.persistence import SymbolStore
from core.types import (
    DEFAULT_SYMBOL_LIMIT,
    TOTAL_BALANCE_SYMBOL,
    SymbolBalance,
    SymbolLimit,
    SymbolStatus,
    TradingSymbol,
)

logger = logging.getLogger(__name__)


class SymbolLifecycleManager:
    """Symbol state transitions and limit/balance reads on top of a SymbolStore.

    Holds no copies of records between calls; every operation fetches what it
    needs from the store.
    """

    def __init__(self, *, store: SymbolStore, default_limit: Decimal = DEFAULT_SYMBOL_LIMIT) -> None:
        self._store = store
        self._default_limit = default_limit

    # ========== Transitions ==========

    def prepare(self, symbol: str) -> TradingSymbol:
        """Create a new symbol in PREPARING with zero balance and the default limit.

        Raises:
            AlreadyTrading: A record for this symbol already exists.
        """
        if self._store.get_symbol(symbol=symbol) is not None:
            raise AlreadyTrading(symbol)

        record = TradingSymbol(
            symbol=symbol,
            status=SymbolStatus.PREPARING,
            balance=Decimal("0"),
            limit=self._default_limit,
        )
        self._store.save_symbol(symbol=record)
        logger.info(f"Symbol {symbol} prepared")
        return record

    def start(self, symbol: str) -> TradingSymbol:
        return self._set_status(symbol, SymbolStatus.ACTIVE)

    def resume(self, symbol: str) -> TradingSymbol:
        return self._set_status(symbol, SymbolStatus.ACTIVE)

    def suspend(self, symbol: str) -> TradingSymbol:
        return self._set_status(symbol, SymbolStatus.SUSPENDED)

    def stop(self, symbol: str) -> None:
        """Remove the symbol entirely. Stopping an unknown symbol is an error."""
        self._require(symbol)
        self._store.delete_symbol(symbol=symbol)
        logger.info(f"Symbol {symbol} stopped")

    # ========== Reads ==========

    def list_symbols(self) -> Sequence[TradingSymbol]:
        return list(self._store.get_symbols())

    def get_balances(self) -> list[SymbolBalance]:
        """Per-symbol balances followed by one synthetic total row."""
        balances = [SymbolBalance(symbol=s.symbol, amount=s.balance) for s in self._store.get_symbols()]
        total = sum((b.amount for b in balances), Decimal("0"))
        balances.append(SymbolBalance(symbol=TOTAL_BALANCE_SYMBOL, amount=total))
        return balances

    def get_limits(self) -> list[SymbolLimit]:
        return [SymbolLimit(symbol=s.symbol, limit=s.limit) for s in self._store.get_symbols()]

    # ========== Limits ==========

    def set_limits(self, limits: Iterable[SymbolLimit]) -> None:
        """Apply limit assignments one by one, in order.

        Not atomic: the first unknown symbol raises SymbolNotFound and the
        assignments before it stay saved.
        """
        for assignment in limits:
            record = self._require(assignment.symbol)
            self._store.save_symbol(symbol=dataclasses.replace(record, limit=assignment.limit))
            logger.info(f"Symbol {assignment.symbol} limit set to {assignment.limit}")

    # ========== Internal ==========

    def _require(self, symbol: str) -> TradingSymbol:
        record = self._store.get_symbol(symbol=symbol)
        if record is None:
            raise SymbolNotFound(symbol)
        return record

    def _set_status(self, symbol: str, status: SymbolStatus) -> TradingSymbol:
        record = dataclasses.replace(self._require(symbol), status=status)
        self._store.save_symbol(symbol=record)
        logger.info(f"Symbol {symbol} status set to {status.value}")
        return record
