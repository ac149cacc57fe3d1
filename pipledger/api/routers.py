"""Calculator API routers — /instruments, /pip-value, /risk, /lot-size, /trades endpoints.

No business logic.  Delegates to the valuation engine, position sizer,
trade settler, and journal statistics.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from pipledger.risk.position_sizer import PositionSizer
from pipledger.risk.valuation import ValuationEngine
from pipledger.trades.models import Trade, TradeRecordError
from pipledger.trades.settlement import TradeSettler, risk_reward_ratio
from pipledger.trades.stats import balance_history, calculate_balance, calculate_trade_stats

logger = logging.getLogger("pipledger")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_engine: Optional[ValuationEngine] = None
_sizer: Optional[PositionSizer] = None
_settler: Optional[TradeSettler] = None
_defaults: dict = {
    "account_currency": "USD",
    "default_risk_pct": 1.0,
    "max_risk_pct": 2.0,
}


def configure_routers(
    engine: Optional[ValuationEngine] = None,
    settler: Optional[TradeSettler] = None,
    account_currency: Optional[str] = None,
    default_risk_pct: Optional[float] = None,
    max_risk_pct: Optional[float] = None,
) -> None:
    """Inject dependencies from the application startup.

    Args:
        engine: A ``ValuationEngine``; a default one is built when omitted.
        settler: A ``TradeSettler``; defaults to one over *engine*.
        account_currency: Default currency for money results.
        default_risk_pct: Risk % used by ``/lot-size`` when none is given.
        max_risk_pct: Ceiling used by ``/risk-check`` when none is given.
    """
    global _engine, _sizer, _settler  # noqa: PLW0603
    _engine = engine if engine is not None else ValuationEngine()
    _sizer = PositionSizer(_engine)
    _settler = settler if settler is not None else TradeSettler(_engine)
    if account_currency is not None:
        _defaults["account_currency"] = account_currency
    if default_risk_pct is not None:
        _defaults["default_risk_pct"] = default_risk_pct
    if max_risk_pct is not None:
        _defaults["max_risk_pct"] = max_risk_pct


def _services() -> tuple[ValuationEngine, PositionSizer, TradeSettler]:
    if _engine is None:
        configure_routers()
    return _engine, _sizer, _settler


def _currency(value: Optional[str]) -> str:
    return value or _defaults["account_currency"]


# ── Instruments ──────────────────────────────────────────────────────────


@router.get("/instruments/{symbol:path}")
async def get_instrument(symbol: str):
    """Return the resolved spec, pair type, and reference rate for a symbol."""
    engine, _, _ = _services()
    resolver = engine.resolver
    spec = resolver.resolve_spec(symbol)
    return {
        "symbol": symbol,
        "asset_class": spec.asset_class,
        "pair_type": resolver.resolve_pair_type(symbol),
        "contract_size": spec.contract_size,
        "pip_size": spec.pip_size,
        "base_value": spec.base_value,
        "exchange_rate": resolver.resolve_exchange_rate(symbol),
        "contract_unit": resolver.contract_unit(symbol),
    }


@router.get("/pip-value")
async def get_pip_value(
    symbol: str,
    account_currency: Optional[str] = Query(default=None),
):
    """Return the value of one pip on one standard lot."""
    engine, _, _ = _services()
    currency = _currency(account_currency)
    return {
        "symbol": symbol,
        "account_currency": currency,
        "pip_value": engine.pip_value(symbol, currency),
    }


# ── Risk & sizing ────────────────────────────────────────────────────────


@router.get("/risk")
async def get_risk(
    symbol: str,
    lot_size: float,
    entry_price: float,
    stop_loss: float,
    take_profit: Optional[float] = Query(default=None),
    account_currency: Optional[str] = Query(default=None),
):
    """Return money at risk, potential profit, and R:R for a planned trade."""
    engine, _, _ = _services()
    currency = _currency(account_currency)
    profit = (
        engine.potential_profit(symbol, lot_size, entry_price, take_profit, currency)
        if take_profit is not None else None
    )
    return {
        "symbol": symbol,
        "risk_amount": engine.risk_amount(symbol, lot_size, entry_price, stop_loss, currency),
        "potential_profit": profit,
        "risk_reward_ratio": risk_reward_ratio(entry_price, stop_loss, take_profit),
    }


@router.get("/lot-size")
async def get_lot_size(
    symbol: str,
    entry_price: float,
    stop_loss: float,
    account_balance: float,
    risk_pct: Optional[float] = Query(default=None),
    account_currency: Optional[str] = Query(default=None),
):
    """Return the lot size that risks ``risk_pct`` % of the balance."""
    _, sizer, _ = _services()
    pct = risk_pct if risk_pct is not None else _defaults["default_risk_pct"]
    lots = sizer.suggested_lot_size(
        symbol, entry_price, stop_loss, account_balance, pct,
        _currency(account_currency),
    )
    return {"symbol": symbol, "risk_pct": pct, "lot_size": lots}


@router.get("/risk-check")
async def get_risk_check(
    symbol: str,
    lot_size: float,
    entry_price: float,
    stop_loss: float,
    account_balance: float,
    max_risk_pct: Optional[float] = Query(default=None),
    account_currency: Optional[str] = Query(default=None),
):
    """Check whether a lot size stays within the risk ceiling."""
    _, sizer, _ = _services()
    ceiling = max_risk_pct if max_risk_pct is not None else _defaults["max_risk_pct"]
    check = sizer.check_risk_limit(
        symbol, lot_size, entry_price, stop_loss, account_balance, ceiling,
        _currency(account_currency),
    )
    return {
        "valid": check.valid,
        "actual_risk": check.actual_risk,
        "max_risk": check.max_risk,
    }


# ── Trades ───────────────────────────────────────────────────────────────


@router.post("/trades/evaluate")
async def post_evaluate_trade(body: dict):
    """Compute ``profit_loss`` and ``risk_reward_ratio`` for a trade record."""
    _, _, settler = _services()
    try:
        trade = Trade.from_record(body)
    except TradeRecordError as exc:
        logger.warning("Rejected trade record: %s", exc)
        return {"status": "error", "errors": exc.errors}
    result = settler.evaluate(trade, _currency(body.get("account_currency")))
    return {
        "status": "ok",
        "profit_loss": result.profit_loss,
        "risk_reward_ratio": result.risk_reward_ratio,
    }


@router.post("/trades/stats")
async def post_trade_stats(body: dict):
    """Return journal statistics, balance, and balance history for ``trades``."""
    trades = body.get("trades", [])
    if not isinstance(trades, list):
        return {"status": "error", "errors": ["trades must be a list"]}
    trades = [t for t in trades if isinstance(t, dict)]
    return {
        "status": "ok",
        "stats": calculate_trade_stats(trades),
        "balance": calculate_balance(trades),
        "history": balance_history(trades),
    }
