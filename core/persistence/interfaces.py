from __future__ import annotations

from typing import Optional, Protocol, Sequence

from core.types import Deal, TradingSymbol


class SymbolStore(Protocol):
    def save_symbol(self, *, symbol: TradingSymbol) -> None:
        """Insert or replace the record keyed by ``symbol.symbol``."""

    def get_symbols(self) -> Sequence[TradingSymbol]:
        """Fetch every symbol record. Empty when none exist."""

    def get_symbol(self, *, symbol: str) -> Optional[TradingSymbol]:
        """Fetch a single symbol record, or None when absent."""

    def delete_symbol(self, *, symbol: str) -> None:
        """Remove a symbol record. Deleting an absent key is a no-op."""


class DealStore(Protocol):
    def save_deal(self, *, deal: Deal) -> None:
        """Insert or replace the record keyed by ``deal.id``."""

    def get_deals(self) -> Sequence[Deal]:
        """Fetch every deal record. Empty when none exist."""

    def get_deal(self, *, deal_id: str) -> Optional[Deal]:
        """Fetch a single deal record, or None when absent."""

    def delete_deal(self, *, deal_id: str) -> None:
        """Remove a deal record. Deleting an absent key is a no-op."""
