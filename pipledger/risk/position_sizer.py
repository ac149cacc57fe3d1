"""Position sizing — pure math, no I/O.

Converts between lot size and the percentage of account balance put at
risk by a stop-loss, and checks a lot size against a risk ceiling.
"""

import math
from dataclasses import dataclass
from typing import Optional

from pipledger.risk.valuation import ValuationEngine, all_positive


def round_half_up(value: float, places: int = 2) -> float:
    """Round *value* half away from zero to *places* decimals."""
    factor = 10 ** places
    scaled = abs(value) * factor
    if not math.isfinite(scaled):
        return value
    return math.copysign(math.floor(scaled + 0.5) / factor, value)


@dataclass(frozen=True)
class RiskLimitCheck:
    """Outcome of comparing a lot size's risk with a ceiling."""

    valid: bool
    actual_risk: float  # percent of balance
    max_risk: float  # percent of balance


class PositionSizer:
    """Lot-size and risk-percentage calculations on top of a valuation engine.

    Args:
        engine: The ``ValuationEngine`` used to price stop distances.
    """

    def __init__(self, engine: Optional[ValuationEngine] = None) -> None:
        self._engine = engine if engine is not None else ValuationEngine()

    @property
    def engine(self) -> ValuationEngine:
        return self._engine

    def suggested_lot_size(
        self,
        symbol,
        entry_price: float,
        stop_price: float,
        account_balance: float,
        risk_pct: float,
        account_currency: str = "USD",
    ) -> float:
        """Lots that risk *risk_pct* % of *account_balance* at the stop.

        Formula::

            target_risk  = account_balance × (risk_pct / 100)
            per_lot_risk = money moved by |entry − stop| on one lot
            lots         = target_risk / per_lot_risk

        Per-lot risk is priced the same way as ``risk_amount``, including
        the contract-size path for metals.

        Returns:
            Lots rounded to 2 decimals, or 0.0 when any input is
            non-positive, the stop distance is zero, or the result overflows.
        """
        if not all_positive(entry_price, stop_price, account_balance, risk_pct):
            return 0.0

        distance = abs(entry_price - stop_price)
        if distance <= 0:
            return 0.0

        per_lot_risk = self._engine.per_lot_risk(symbol, distance, account_currency)
        if per_lot_risk <= 0:
            return 0.0

        target_risk = account_balance * (risk_pct / 100.0)
        lots = target_risk / per_lot_risk
        if not math.isfinite(lots):
            return 0.0
        return round_half_up(lots)

    def risk_percentage_from_lot_size(
        self,
        symbol,
        lot_size: float,
        entry_price: float,
        stop_price: float,
        account_balance: float,
        account_currency: str = "USD",
    ) -> float:
        """Percent of *account_balance* lost if the stop is hit, 2 decimals."""
        if not all_positive(lot_size, entry_price, stop_price, account_balance):
            return 0.0

        risk = self._engine.risk_amount(
            symbol, lot_size, entry_price, stop_price, account_currency,
        )
        pct = (risk / account_balance) * 100.0
        if not math.isfinite(pct):
            return 0.0
        return round_half_up(pct)

    def check_risk_limit(
        self,
        symbol,
        lot_size: float,
        entry_price: float,
        stop_price: float,
        account_balance: float,
        max_risk_pct: float,
        account_currency: str = "USD",
    ) -> RiskLimitCheck:
        """Compare the risk of *lot_size* against *max_risk_pct*."""
        actual = self.risk_percentage_from_lot_size(
            symbol, lot_size, entry_price, stop_price, account_balance,
            account_currency,
        )
        return RiskLimitCheck(
            valid=actual <= max_risk_pct,
            actual_risk=actual,
            max_risk=max_risk_pct,
        )
