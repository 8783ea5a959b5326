"""Open deal listing and closure."""

from .ledger import DealLedger

__all__ = ["DealLedger"]
