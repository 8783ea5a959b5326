from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

from core.types import Deal, TradingSymbol


class MemoryStores:
    """Dict-backed implementation of SymbolStore and DealStore.

    Intended for tests and local bootstrap. Records are frozen dataclasses, so
    handing them out directly never exposes mutable internal state. Listing
    follows insertion order; an upsert of an existing key keeps its position.
    """

    def __init__(
        self,
        *,
        symbols: Iterable[TradingSymbol] = (),
        deals: Iterable[Deal] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._symbols: dict[str, TradingSymbol] = {s.symbol: s for s in symbols}
        self._deals: dict[str, Deal] = {d.id: d for d in deals}

    def ping(self) -> None:
        """Always reachable; present so health checks treat backends alike."""

    # ---- SymbolStore

    def save_symbol(self, *, symbol: TradingSymbol) -> None:
        with self._lock:
            self._symbols[symbol.symbol] = symbol

    def get_symbols(self) -> Sequence[TradingSymbol]:
        with self._lock:
            return list(self._symbols.values())

    def get_symbol(self, *, symbol: str) -> Optional[TradingSymbol]:
        with self._lock:
            return self._symbols.get(symbol)

    def delete_symbol(self, *, symbol: str) -> None:
        with self._lock:
            self._symbols.pop(symbol, None)

    # ---- DealStore

    def save_deal(self, *, deal: Deal) -> None:
        with self._lock:
            self._deals[deal.id] = deal

    def get_deals(self) -> Sequence[Deal]:
        with self._lock:
            return list(self._deals.values())

    def get_deal(self, *, deal_id: str) -> Optional[Deal]:
        with self._lock:
            return self._deals.get(deal_id)

    def delete_deal(self, *, deal_id: str) -> None:
        with self._lock:
            self._deals.pop(deal_id, None)
