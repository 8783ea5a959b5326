"""Shared test fixtures for pytest.

Provides in-memory stores, a call-recording spy store, and a service/client
pair wired the same way the application wires them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Sequence
from unittest.mock import patch

import pytest

from core.access import AccessGate
from core.deals import DealLedger
from core.service import TradingService
from core.storage import MemoryStores, seed_stores
from core.symbols import SymbolLifecycleManager
from core.types import Deal, DealPrediction, TradingSymbol

OPERATOR_ID = 1001
VIEWER_ID = 2002
BOTH_ID = 3003
STRANGER_ID = 9999

SEED_TIME = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class SpyStores:
    """Wraps a store and records every call made through the persistence API."""

    def __init__(self, inner: Optional[MemoryStores] = None) -> None:
        self.inner = inner or MemoryStores()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _record(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))

    def save_symbol(self, *, symbol: TradingSymbol) -> None:
        self._record("save_symbol", symbol=symbol)
        self.inner.save_symbol(symbol=symbol)

    def get_symbols(self) -> Sequence[TradingSymbol]:
        self._record("get_symbols")
        return self.inner.get_symbols()

    def get_symbol(self, *, symbol: str) -> Optional[TradingSymbol]:
        self._record("get_symbol", symbol=symbol)
        return self.inner.get_symbol(symbol=symbol)

    def delete_symbol(self, *, symbol: str) -> None:
        self._record("delete_symbol", symbol=symbol)
        self.inner.delete_symbol(symbol=symbol)

    def save_deal(self, *, deal: Deal) -> None:
        self._record("save_deal", deal=deal)
        self.inner.save_deal(deal=deal)

    def get_deals(self) -> Sequence[Deal]:
        self._record("get_deals")
        return self.inner.get_deals()

    def get_deal(self, *, deal_id: str) -> Optional[Deal]:
        self._record("get_deal", deal_id=deal_id)
        return self.inner.get_deal(deal_id=deal_id)

    def delete_deal(self, *, deal_id: str) -> None:
        self._record("delete_deal", deal_id=deal_id)
        self.inner.delete_deal(deal_id=deal_id)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


def make_deal(deal_id: str, symbol: str = "adausdt", amount: str = "0.01") -> Deal:
    return Deal(
        id=deal_id,
        symbol=symbol,
        created_at=SEED_TIME,
        amount=Decimal(amount),
        amount_currency=Decimal("361"),
        delta_amount=Decimal("-12"),
        delta_percent=Decimal("-2"),
        prediction=DealPrediction(stop=Decimal("-3"), max=Decimal("2")),
    )


@pytest.fixture
def gate() -> AccessGate:
    return AccessGate.from_ids(
        operators=[OPERATOR_ID, BOTH_ID],
        viewers=[VIEWER_ID, BOTH_ID],
    )


@pytest.fixture
def stores() -> MemoryStores:
    return MemoryStores()


@pytest.fixture
def seeded_stores() -> MemoryStores:
    """Memory stores holding the starter symbols (balances 55/66/33/22) and deals."""
    stores = MemoryStores()
    seed_stores(symbols=stores, deals=stores, now=SEED_TIME)
    return stores


@pytest.fixture
def spy_stores(seeded_stores: MemoryStores) -> SpyStores:
    return SpyStores(seeded_stores)


def build_test_service(gate: AccessGate, stores: Any) -> TradingService:
    return TradingService(
        gate=gate,
        symbols=SymbolLifecycleManager(store=stores),
        deals=DealLedger(store=stores),
    )


@pytest.fixture
def service(gate: AccessGate, seeded_stores: MemoryStores) -> TradingService:
    return build_test_service(gate, seeded_stores)


@pytest.fixture
def client(service: TradingService, seeded_stores: MemoryStores):
    """TestClient with the seeded in-memory service patched into the app."""
    from fastapi.testclient import TestClient

    from api.main import app

    with patch("api.main._service", service), patch("api.main._stores", seeded_stores):
        yield TestClient(app)
