"""Typed failures raised by the trading core.

Every error carries a stable ``kind`` (used as the ``error`` field of API
responses) and the offending ``key`` when there is one. Instances are created
per raise; nothing here is shared module state.
"""

from __future__ import annotations

from typing import Optional


class TradingError(Exception):
    """Base class for all failures surfaced to callers."""

    kind: str = "trading_error"

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class NotAuthorizedOperator(TradingError):
    kind = "not_authorized_operator"

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("you are not authorized to perform this operation")


class NotAuthorizedViewer(TradingError):
    kind = "not_authorized_viewer"

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("you are not authorized to view this data")


class SymbolNotFound(TradingError):
    kind = "symbol_not_found"

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"unknown symbol '{symbol}'", key=symbol)


class DealNotFound(TradingError):
    kind = "deal_not_found"

    def __init__(self, deal_id: str) -> None:
        self.deal_id = deal_id
        super().__init__(f"unknown deal '{deal_id}'", key=deal_id)


class AlreadyTrading(TradingError):
    kind = "already_trading"

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"{symbol} is already in trading", key=symbol)


class OperationNotImplemented(TradingError):
    """Raised by operations that exist in the contract but have no implementation."""

    kind = "not_implemented"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not implemented")


class StorageError(TradingError):
    """Opaque persistence failure (connectivity, driver or decode errors)."""

    kind = "storage_error"


class ConfigError(ValueError):
    """Raised at startup when an environment value cannot be parsed."""
