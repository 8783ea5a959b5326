"""Single entry point used by the transport layer.

Each method checks the caller's role first and only then touches the managers,
so a denied call never reaches the store.
"""

from __future__ import annotations

from typing import Collection, Iterable, NoReturn, Sequence

from core.access import AccessGate
from core.deals import DealLedger
from core.symbols import SymbolLifecycleManager
from core.types import Deal, SymbolBalance, SymbolLimit, TradingSymbol


class TradingService:
    def __init__(
        self,
        *,
        gate: AccessGate,
        symbols: SymbolLifecycleManager,
        deals: DealLedger,
    ) -> None:
        self._gate = gate
        self._symbols = symbols
        self._deals = deals

    @property
    def gate(self) -> AccessGate:
        return self._gate

    # ---- symbols

    def list_symbols(self, user_id: int) -> Sequence[TradingSymbol]:
        self._gate.require_viewer(user_id)
        return self._symbols.list_symbols()

    def prepare_symbol(self, user_id: int, symbol: str) -> None:
        self._gate.require_operator(user_id)
        self._symbols.prepare(symbol)

    def start_symbol(self, user_id: int, symbol: str) -> None:
        self._gate.require_operator(user_id)
        self._symbols.start(symbol)

    def stop_symbol(self, user_id: int, symbol: str) -> None:
        self._gate.require_operator(user_id)
        self._symbols.stop(symbol)

    def suspend_symbol(self, user_id: int, symbol: str) -> None:
        self._gate.require_operator(user_id)
        self._symbols.suspend(symbol)

    def resume_symbol(self, user_id: int, symbol: str) -> None:
        self._gate.require_operator(user_id)
        self._symbols.resume(symbol)

    # ---- balances and limits

    def get_balances(self, user_id: int) -> list[SymbolBalance]:
        self._gate.require_viewer(user_id)
        return self._symbols.get_balances()

    def get_limits(self, user_id: int) -> list[SymbolLimit]:
        self._gate.require_viewer(user_id)
        return self._symbols.get_limits()

    def set_limits(self, user_id: int, limits: Iterable[SymbolLimit]) -> None:
        self._gate.require_operator(user_id)
        self._symbols.set_limits(limits)

    # ---- deals

    def list_active_deals(self, user_id: int, *, all: bool, ids: Collection[str] = ()) -> Sequence[Deal]:
        self._gate.require_viewer(user_id)
        return self._deals.list_active_deals(all=all, ids=ids)

    def list_potential_deals(self, user_id: int) -> NoReturn:
        self._gate.require_viewer(user_id)
        self._deals.list_potential_deals()

    def close_deals(self, user_id: int, *, all: bool, ids: Sequence[str] = ()) -> None:
        self._gate.require_operator(user_id)
        self._deals.close_deals(all=all, ids=ids)
