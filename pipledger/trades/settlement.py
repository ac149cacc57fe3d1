"""Trade settlement — realized P&L and risk/reward for journal trades.

Only closed trades with an exit price settle to a non-zero figure.  Open
and cancelled trades always settle to 0.0.

``risk_amount`` and ``potential_profit`` are not sign-aware, so the
settler decides up front which price is the adverse one::

    long,  exit >  entry   +potential_profit(entry → exit)
    long,  exit <= entry   -risk_amount(entry → exit)
    short, exit <  entry   +potential_profit(exit → entry)
    short, exit >= entry   -risk_amount(exit → entry)
"""

import logging
from typing import Optional

from pipledger.risk.valuation import ValuationEngine
from pipledger.trades.models import Trade, TradeEvaluation

logger = logging.getLogger("pipledger")

LOT_BASIS_CONTRACT = "contract"
LOT_BASIS_STANDARD = "standard"
LOT_BASES = (LOT_BASIS_CONTRACT, LOT_BASIS_STANDARD)


def risk_reward_ratio(
    entry_price: Optional[float],
    stop_loss: Optional[float],
    take_profit: Optional[float],
) -> Optional[float]:
    """``|take_profit − entry| / |entry − stop_loss|``.

    Returns ``None`` when any level is missing or the stop sits on the
    entry price.
    """
    if entry_price is None or stop_loss is None or take_profit is None:
        return None
    risk = abs(entry_price - stop_loss)
    if risk == 0:
        return None
    return abs(take_profit - entry_price) / risk


class TradeSettler:
    """Derives P&L for trade records.

    Args:
        engine: Valuation engine used to price the price move.
        lot_basis: How raw quantity becomes lots.  ``"contract"`` divides
            by the instrument's contract size; ``"standard"`` divides every
            instrument by the forex standard lot (100,000).
    """

    def __init__(
        self,
        engine: Optional[ValuationEngine] = None,
        lot_basis: str = LOT_BASIS_CONTRACT,
    ) -> None:
        if lot_basis not in LOT_BASES:
            raise ValueError(
                f"lot_basis must be one of {', '.join(LOT_BASES)}, got '{lot_basis}'"
            )
        self._engine = engine if engine is not None else ValuationEngine()
        self._lot_basis = lot_basis

    @property
    def lot_basis(self) -> str:
        return self._lot_basis

    def lots_for(self, trade: Trade) -> float:
        """Convert the trade's raw quantity into lots."""
        if self._lot_basis == LOT_BASIS_STANDARD:
            divisor = self._engine.resolver.reference.standard_lot
        else:
            divisor = self._engine.resolver.resolve_spec(trade.symbol).contract_size
        return (trade.quantity or 0.0) / divisor

    @staticmethod
    def _settles(trade: Trade) -> bool:
        return (
            trade.is_closed
            and bool(trade.symbol)
            and bool(trade.exit_price)
            and trade.entry_price is not None
        )

    def gross_pnl(self, trade: Trade, account_currency: str = "USD") -> float:
        """Price-movement P&L before fees, 0.0 unless the trade is closed."""
        if not self._settles(trade):
            return 0.0

        lots = self.lots_for(trade)
        entry = trade.entry_price
        exit_ = trade.exit_price
        engine = self._engine

        if trade.is_long:
            if exit_ > entry:
                return engine.potential_profit(trade.symbol, lots, entry, exit_, account_currency)
            return -engine.risk_amount(trade.symbol, lots, entry, exit_, account_currency)

        if exit_ < entry:
            return engine.potential_profit(trade.symbol, lots, exit_, entry, account_currency)
        return -engine.risk_amount(trade.symbol, lots, exit_, entry, account_currency)

    def settle(self, trade: Trade, account_currency: str = "USD") -> float:
        """Net P&L: gross P&L minus fees and commission.

        Trades that do not settle (not closed, no exit price, no symbol)
        return 0.0 with no costs applied.
        """
        if not self._settles(trade):
            return 0.0
        gross = self.gross_pnl(trade, account_currency)
        net = gross - trade.total_costs
        logger.debug(
            "Settled %s %s %s: gross=%.2f net=%.2f",
            trade.side, trade.quantity, trade.symbol, gross, net,
        )
        return net

    def evaluate(self, trade: Trade, account_currency: str = "USD") -> TradeEvaluation:
        """Compute the P&L and R:R a persistence layer stores with a trade."""
        return TradeEvaluation(
            profit_loss=self.settle(trade, account_currency),
            risk_reward_ratio=risk_reward_ratio(
                trade.entry_price, trade.stop_loss, trade.take_profit,
            ),
        )
