"""Trade data models — the trade record the settlement layer reads."""

from dataclasses import dataclass, fields
from typing import Optional

# Sides
BUY = "buy"
SELL = "sell"
LONG = "long"
SHORT = "short"

LONG_SIDES = (BUY, LONG)

# Statuses
OPEN = "open"
CLOSED = "closed"
CANCELLED = "cancelled"

REQUIRED_FIELDS = ("symbol", "side", "quantity", "entry_price")
NUMERIC_FIELDS = (
    "quantity", "entry_price", "exit_price", "fees", "commission",
    "stop_loss", "take_profit",
)
TEXT_FIELDS = ("symbol", "side", "status", "entry_date", "exit_date")


class TradeRecordError(ValueError):
    """A trade record with missing or mistyped fields.

    ``errors`` holds one message per offending field.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class Trade:
    """A journal trade record, owned by the persistence layer."""

    symbol: str
    side: str  # "buy", "sell", "long" or "short"
    quantity: float  # raw units, not lots
    entry_price: float
    exit_price: Optional[float] = None
    status: str = OPEN  # "open", "closed" or "cancelled"
    fees: Optional[float] = None
    commission: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    entry_date: str = ""
    exit_date: str = ""

    @property
    def is_long(self) -> bool:
        return (self.side or "").lower() in LONG_SIDES

    @property
    def is_closed(self) -> bool:
        return (self.status or "").lower() == CLOSED

    @property
    def total_costs(self) -> float:
        """Fees plus commission, with missing values counted as zero."""
        return float(self.fees or 0.0) + float(self.commission or 0.0)

    @classmethod
    def from_record(cls, record: dict) -> "Trade":
        """Build a ``Trade`` from a persisted row, ignoring unknown columns.

        Numeric columns are coerced with ``float()``.

        Raises:
            TradeRecordError: If a required column is missing or a column
                has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in record.items() if k in known and v is not None}
        errors = [f"{name} is required" for name in REQUIRED_FIELDS if name not in values]

        for name in NUMERIC_FIELDS:
            if name not in values:
                continue
            raw = values[name]
            if isinstance(raw, bool):
                errors.append(f"{name} must be a number")
                continue
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                errors.append(f"{name} must be a number")

        for name in TEXT_FIELDS:
            if name in values and not isinstance(values[name], str):
                errors.append(f"{name} must be a string")

        if errors:
            raise TradeRecordError(errors)
        return cls(**values)


@dataclass(frozen=True)
class TradeEvaluation:
    """Derived values stored alongside a trade on create/update."""

    profit_loss: float
    risk_reward_ratio: Optional[float]
