"""Starter data for a fresh store.

Bootstrap convenience only: seeding wipes both collections and writes a fixed
set of symbols and deals.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.persistence import DealStore, SymbolStore
from core.types import Deal, DealPrediction, SymbolStatus, TradingSymbol

logger = logging.getLogger(__name__)

STARTER_SYMBOLS: tuple[TradingSymbol, ...] = (
    TradingSymbol("adausdt", SymbolStatus.ACTIVE, Decimal("55"), Decimal("100")),
    TradingSymbol("linkusdt", SymbolStatus.ACTIVE, Decimal("66"), Decimal("100")),
    TradingSymbol("zilusdt", SymbolStatus.ACTIVE, Decimal("33"), Decimal("100")),
    TradingSymbol("ltcusdt", SymbolStatus.ACTIVE, Decimal("22"), Decimal("100")),
)

# (id, symbol, amount, amount_currency, delta_amount, delta_percent, stop, max)
STARTER_DEALS: tuple[tuple[str, str, str, str, str, str, str, str], ...] = (
    ("adausdt-1657483456", "adausdt", "0.01", "361", "-12", "-2", "-3", "2"),
    ("adausdt-1630958723", "adausdt", "0.04", "734", "15", "2", "-5", "7"),
    ("linkusdt-3492445345", "linkusdt", "0.05", "154", "7", "5", "-15", "3"),
)


def starter_deals(now: datetime) -> list[Deal]:
    return [
        Deal(
            id=deal_id,
            symbol=symbol,
            created_at=now,
            amount=Decimal(amount),
            amount_currency=Decimal(amount_currency),
            delta_amount=Decimal(delta_amount),
            delta_percent=Decimal(delta_percent),
            prediction=DealPrediction(stop=Decimal(stop), max=Decimal(max_)),
        )
        for deal_id, symbol, amount, amount_currency, delta_amount, delta_percent, stop, max_ in STARTER_DEALS
    ]


def seed_stores(*, symbols: SymbolStore, deals: DealStore, now: Optional[datetime] = None) -> None:
    """Replace the contents of both stores with the starter set."""
    now = now or datetime.now(timezone.utc)

    for existing in symbols.get_symbols():
        symbols.delete_symbol(symbol=existing.symbol)
    for symbol in STARTER_SYMBOLS:
        symbols.save_symbol(symbol=symbol)

    for existing_deal in deals.get_deals():
        deals.delete_deal(deal_id=existing_deal.id)
    for deal in starter_deals(now):
        deals.save_deal(deal=deal)

    logger.info(f"Seeded {len(STARTER_SYMBOLS)} symbols and {len(STARTER_DEALS)} deals")
