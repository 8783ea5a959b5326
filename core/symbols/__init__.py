"""Trading symbol lifecycle: status transitions, limits and balances."""

from .manager import SymbolLifecycleManager

__all__ = ["SymbolLifecycleManager"]
