"""FastAPI application for the trading-symbol and deal service.

This module provides the HTTP API for:
- GET  /health - Storage connectivity check
- GET  /symbols - List trading symbols and their status
- POST /symbols/{symbol}/prepare|start|stop|suspend|resume - Symbol lifecycle
- GET  /balances - Per-symbol balances plus the "usd" total
- GET  /limits, PUT /limits - Read and update per-symbol limits
- GET  /deals/active - List open deals
- GET  /deals/potential - Potential deals (not implemented, 501)
- POST /deals/close - Close all or selected deals

Every call except /health must carry the caller's numeric id in the
X-User-Id header. Reads need a viewer id, writes an operator id
(USER_VIEWERS_LIST / USER_OPERATORS_LIST).
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Optional

from fastapi import FastAPI, Header, HTTPException, Path, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from core.bootstrap import Stores, build_service, build_stores
from core.config import AppConfig
from core.errors import (
    AlreadyTrading,
    DealNotFound,
    NotAuthorizedOperator,
    NotAuthorizedViewer,
    OperationNotImplemented,
    StorageError,
    SymbolNotFound,
    TradingError,
)
from core.service import TradingService
from core.types import Deal, SymbolBalance, SymbolLimit, TradingSymbol

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Gandalf API",
    description="Trading symbol lifecycle and deal management for operators and viewers",
    version="1.0.0",
)

# Global instances (initialized lazily from the environment)
_config: AppConfig | None = None
_stores: Stores | None = None
_service: TradingService | None = None

_ERROR_STATUS: dict[type[TradingError], int] = {
    NotAuthorizedOperator: 403,
    NotAuthorizedViewer: 403,
    SymbolNotFound: 404,
    DealNotFound: 404,
    AlreadyTrading: 409,
    OperationNotImplemented: 501,
    StorageError: 503,
}


def _get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def _get_stores() -> Stores:
    """Get or initialize the configured storage backend."""
    global _stores
    if _stores is None:
        _stores = build_stores(_get_config())
    return _stores


def _get_service() -> TradingService:
    """Get or initialize the trading service."""
    global _service
    if _service is None:
        _service = build_service(_get_config(), stores=_get_stores())
    return _service


# =============================================================================
# Request / response models
# =============================================================================


class SymbolLimitRequest(BaseModel):
    symbol: str = Field(..., min_length=1, description="Trading symbol (e.g., adausdt)")
    limit: Decimal = Field(..., description="New trading limit")


class SetLimitsRequest(BaseModel):
    """Request body for updating limits. Applied in order, not atomically."""

    limits: list[SymbolLimitRequest] = Field(default_factory=list)


class CloseDealsRequest(BaseModel):
    """Request body for closing deals."""

    all: bool = Field(False, description="Close every open deal")
    deal_ids: list[str] = Field(default_factory=list, description="Deal ids to close, in order")


def _symbol_to_response(symbol: TradingSymbol) -> dict[str, Any]:
    return {"symbol": symbol.symbol, "status": symbol.status.value}


def _balance_to_response(balance: SymbolBalance) -> dict[str, Any]:
    return {"symbol": balance.symbol, "amount": str(balance.amount)}


def _limit_to_response(limit: SymbolLimit) -> dict[str, Any]:
    return {"symbol": limit.symbol, "limit": str(limit.limit)}


def _deal_to_response(deal: Deal) -> dict[str, Any]:
    return {
        "deal_id": deal.id,
        "symbol": deal.symbol,
        "created_at": deal.created_at.isoformat(),
        "amount": str(deal.amount),
        "amount_currency": str(deal.amount_currency),
        "delta_amount": str(deal.delta_amount),
        "delta_percent": str(deal.delta_percent),
        "prediction": {
            "stop": str(deal.prediction.stop),
            "max": str(deal.prediction.max),
        },
    }


# =============================================================================
# Health
# =============================================================================


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint.

    Raises:
        HTTPException: If the storage backend is unreachable.
    """
    try:
        stores = _get_stores()
        # Run blocking DB checks in thread pool to avoid blocking event loop
        await asyncio.to_thread(stores.ping)
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail={"status": "error", "storage": {"connected": False, "error": type(e).__name__}},
        ) from e

    return {"status": "ok", "storage": {"connected": True}}


# =============================================================================
# Symbol Endpoints
# =============================================================================


@app.get("/symbols")
async def list_symbols(user_id: int = Header(..., alias="X-User-Id")) -> dict[str, Any]:
    """List trading symbols with their status."""
    symbols = await asyncio.to_thread(_get_service().list_symbols, user_id)
    return {"symbols": [_symbol_to_response(s) for s in symbols]}


@app.post("/symbols/{symbol}/prepare")
async def prepare_symbol(
    symbol: str = Path(..., min_length=1, description="Symbol to prepare"),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    """Create a symbol in PREPARING state (409 if it already exists)."""
    await asyncio.to_thread(_get_service().prepare_symbol, user_id, symbol)
    return {}


@app.post("/symbols/{symbol}/start")
async def start_symbol(
    symbol: str = Path(..., min_length=1),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    await asyncio.to_thread(_get_service().start_symbol, user_id, symbol)
    return {}


@app.post("/symbols/{symbol}/stop")
async def stop_symbol(
    symbol: str = Path(..., min_length=1),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    """Stop trading a symbol. The symbol record is removed."""
    await asyncio.to_thread(_get_service().stop_symbol, user_id, symbol)
    return {}


@app.post("/symbols/{symbol}/suspend")
async def suspend_symbol(
    symbol: str = Path(..., min_length=1),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    await asyncio.to_thread(_get_service().suspend_symbol, user_id, symbol)
    return {}


@app.post("/symbols/{symbol}/resume")
async def resume_symbol(
    symbol: str = Path(..., min_length=1),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    await asyncio.to_thread(_get_service().resume_symbol, user_id, symbol)
    return {}


# =============================================================================
# Balances & Limits
# =============================================================================


@app.get("/balances")
async def get_balances(user_id: int = Header(..., alias="X-User-Id")) -> dict[str, Any]:
    """Per-symbol balances; the last entry is the synthetic "usd" total."""
    balances = await asyncio.to_thread(_get_service().get_balances, user_id)
    return {"balances": [_balance_to_response(b) for b in balances]}


@app.get("/limits")
async def get_limits(user_id: int = Header(..., alias="X-User-Id")) -> dict[str, Any]:
    limits = await asyncio.to_thread(_get_service().get_limits, user_id)
    return {"limits": [_limit_to_response(limit) for limit in limits]}


@app.put("/limits")
async def set_limits(
    request: SetLimitsRequest,
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    """Update limits in request order.

    Stops at the first unknown symbol (404); earlier updates are kept.
    """
    limits = [SymbolLimit(symbol=item.symbol, limit=item.limit) for item in request.limits]
    await asyncio.to_thread(_get_service().set_limits, user_id, limits)
    return {}


# =============================================================================
# Deal Endpoints
# =============================================================================


@app.get("/deals/active")
async def list_active_deals(
    all: bool = Query(True, description="List every open deal"),
    ids: Optional[list[str]] = Query(None, description="Deal ids (selective listing, not implemented)"),
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    service = _get_service()
    deals = await asyncio.to_thread(lambda: service.list_active_deals(user_id, all=all, ids=ids or ()))
    return {"deals": [_deal_to_response(d) for d in deals]}


@app.get("/deals/potential")
async def list_potential_deals(user_id: int = Header(..., alias="X-User-Id")) -> None:
    """Always answers 501 (viewers) or 403 (everyone else)."""
    await asyncio.to_thread(_get_service().list_potential_deals, user_id)


@app.post("/deals/close")
async def close_deals(
    request: CloseDealsRequest,
    user_id: int = Header(..., alias="X-User-Id"),
) -> dict[str, Any]:
    """Close every deal, or the listed ids in order.

    Stops at the first unknown id (404); deals closed before it stay closed.
    """
    service = _get_service()
    await asyncio.to_thread(lambda: service.close_deals(user_id, all=request.all, ids=request.deal_ids))
    return {}


# =============================================================================
# Error handling
# =============================================================================


@app.exception_handler(TradingError)
async def trading_error_handler(_request, exc: TradingError):
    """Map typed failures to structured error responses."""
    status_code = _ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": {
                "error": exc.kind,
                "message": exc.message,
                "key": exc.key,
            }
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    """Global exception handler to ensure consistent error responses."""
    logger.error(f"Unhandled error: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
