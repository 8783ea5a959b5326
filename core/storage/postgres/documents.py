"""JSON document codec for symbol and deal records.

Decimals are written as strings so no precision is lost in JSONB, datetimes as
ISO-8601. The primary key is kept both as the row id and inside the document.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, Union

from core.types import Deal, DealPrediction, SymbolStatus, TradingSymbol

Document = Mapping[str, Any]


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def dumps(document: Document) -> str:
    return json.dumps(document, separators=(",", ":"))


def loads(raw: Union[str, bytes, Document]) -> Document:
    # psycopg2 already decodes JSONB columns into dicts
    if isinstance(raw, (str, bytes)):
        return json.loads(raw)
    return raw


def symbol_to_document(symbol: TradingSymbol) -> dict[str, Any]:
    return {
        "symbol": symbol.symbol,
        "status": symbol.status.value,
        "balance": str(symbol.balance),
        "limit": str(symbol.limit),
    }


def symbol_from_document(doc: Document) -> TradingSymbol:
    return TradingSymbol(
        symbol=doc["symbol"],
        status=SymbolStatus(doc["status"]),
        balance=Decimal(str(doc["balance"])),
        limit=Decimal(str(doc["limit"])),
    )


def deal_to_document(deal: Deal) -> dict[str, Any]:
    return {
        "id": deal.id,
        "symbol": deal.symbol,
        "created_at": _as_utc(deal.created_at).isoformat(),
        "amount": str(deal.amount),
        "amount_currency": str(deal.amount_currency),
        "delta_amount": str(deal.delta_amount),
        "delta_percent": str(deal.delta_percent),
        "prediction": {
            "stop": str(deal.prediction.stop),
            "max": str(deal.prediction.max),
        },
    }


def deal_from_document(doc: Document) -> Deal:
    prediction = doc["prediction"]
    return Deal(
        id=doc["id"],
        symbol=doc["symbol"],
        created_at=_as_utc(datetime.fromisoformat(doc["created_at"])),
        amount=Decimal(str(doc["amount"])),
        amount_currency=Decimal(str(doc["amount_currency"])),
        delta_amount=Decimal(str(doc["delta_amount"])),
        delta_percent=Decimal(str(doc["delta_percent"])),
        prediction=DealPrediction(
            stop=Decimal(str(prediction["stop"])),
            max=Decimal(str(prediction["max"])),
        ),
    )
