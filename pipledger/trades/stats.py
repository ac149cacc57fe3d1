"""Journal statistics — pure functions over stored trade records.

Each record is a dict with at least ``"status"`` and ``"profit_loss"``;
``balance_history`` also reads ``"exit_date"``.  Missing or ``None`` P&L
counts as 0.
"""

from typing import Optional

from pipledger.trades.models import CLOSED, OPEN


def _pnl(record: dict) -> float:
    return float(record.get("profit_loss") or 0.0)


def _status(record: dict) -> str:
    return str(record.get("status") or "").lower()


def calculate_trade_stats(trades: list[dict]) -> dict:
    """Summary statistics for a user's journal.

    Win rate is the percentage of closed trades with positive P&L.
    Average loss is reported as a positive number.

    Returns:
        Dict with ``total_trades``, ``open_trades``, ``closed_trades``,
        ``total_pnl``, ``win_rate``, ``avg_win``, ``avg_loss``,
        ``best_trade``, ``worst_trade``, ``profit_factor``.
    """
    closed = [
        t for t in trades
        if _status(t) == CLOSED and t.get("profit_loss") is not None
    ]
    winners = [_pnl(t) for t in closed if _pnl(t) > 0]
    losers = [_pnl(t) for t in closed if _pnl(t) < 0]

    gross_profit = sum(winners)
    gross_loss = abs(sum(losers))
    profit_factor: Optional[float] = (
        gross_profit / gross_loss if gross_loss > 0 else None
    )
    closed_pnls = [_pnl(t) for t in closed]

    return {
        "total_trades": len(trades),
        "open_trades": sum(1 for t in trades if _status(t) == OPEN),
        "closed_trades": sum(1 for t in trades if _status(t) == CLOSED),
        "total_pnl": round(sum(_pnl(t) for t in trades), 2),
        "win_rate": round(len(winners) / len(closed) * 100, 2) if closed else 0.0,
        "avg_win": round(gross_profit / len(winners), 2) if winners else 0.0,
        "avg_loss": round(gross_loss / len(losers), 2) if losers else 0.0,
        "best_trade": max(closed_pnls) if closed_pnls else 0.0,
        "worst_trade": min(closed_pnls) if closed_pnls else 0.0,
        "profit_factor": round(profit_factor, 4) if profit_factor is not None else None,
    }


def calculate_balance(trades: list[dict]) -> dict:
    """Account balance derived from trade P&L.

    The balance is the realized P&L of closed trades.  Open trades carry
    a stored P&L of 0 in practice, but any value present is reported as
    unrealized.
    """
    realized = sum(_pnl(t) for t in trades if _status(t) == CLOSED)
    unrealized = sum(_pnl(t) for t in trades if _status(t) == OPEN)
    return {
        "balance": round(realized, 2),
        "realized_pnl": round(realized, 2),
        "unrealized_pnl": round(unrealized, 2),
    }


def balance_history(trades: list[dict]) -> list[dict]:
    """Cumulative balance per exit date, oldest first.

    Only closed trades with an exit date and a P&L contribute.  Dates are
    truncated to ``YYYY-MM-DD``.

    Returns:
        List of ``{"date", "daily_pnl", "balance"}`` dicts.
    """
    daily: dict[str, float] = {}
    for t in trades:
        exit_date = t.get("exit_date")
        if _status(t) != CLOSED or not exit_date or t.get("profit_loss") is None:
            continue
        day = str(exit_date)[:10]
        daily[day] = daily.get(day, 0.0) + _pnl(t)

    history = []
    running = 0.0
    for day in sorted(daily):
        running += daily[day]
        history.append({
            "date": day,
            "daily_pnl": round(daily[day], 2),
            "balance": round(running, 2),
        })
    return history
