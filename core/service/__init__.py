from .facade import TradingService

__all__ = ["TradingService"]
