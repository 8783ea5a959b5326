from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

DEFAULT_SYMBOL_LIMIT = Decimal("100")

# Synthetic balance row appended after the per-symbol balances.
TOTAL_BALANCE_SYMBOL = "usd"


class SymbolStatus(str, Enum):
    """Trading status of a symbol. A stopped symbol has no record at all."""

    PREPARING = "PREPARING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass(frozen=True)
class TradingSymbol:
    symbol: str
    status: SymbolStatus = SymbolStatus.PREPARING
    balance: Decimal = Decimal("0")
    limit: Decimal = DEFAULT_SYMBOL_LIMIT


@dataclass(frozen=True)
class DealPrediction:
    stop: Decimal
    max: Decimal


@dataclass(frozen=True)
class Deal:
    id: str  # conventionally "{symbol}-{unix_ts}"
    symbol: str
    created_at: datetime
    amount: Decimal
    amount_currency: Decimal
    delta_amount: Decimal
    delta_percent: Decimal
    prediction: DealPrediction


@dataclass(frozen=True)
class SymbolBalance:
    symbol: str
    amount: Decimal


@dataclass(frozen=True)
class SymbolLimit:
    symbol: str
    limit: Decimal
