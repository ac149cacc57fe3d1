"""PipLedger — application configuration.

Loads .env variables into a typed config object and builds the immutable
reference data the engine runs on.  Invalid values fail at startup.
"""

import json
import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from pipledger.instruments.models import ReferenceData
from pipledger.instruments.resolver import normalize_symbol
from pipledger.instruments.tables import default_reference_data
from pipledger.trades.settlement import LOT_BASES

logger = logging.getLogger("pipledger")


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    account_currency: str
    default_risk_pct: float
    max_risk_pct: float
    settlement_lot_basis: str  # "contract" or "standard"
    rates_file: Optional[str]
    log_level: str
    api_port: int


def _float_var(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` naming the variable when a value is malformed.
    """
    load_dotenv(dotenv_path=env_path)

    lot_basis = os.environ.get("SETTLEMENT_LOT_BASIS", "contract").lower()
    if lot_basis not in LOT_BASES:
        raise ValueError(
            f"SETTLEMENT_LOT_BASIS must be one of {', '.join(LOT_BASES)}, "
            f"got '{lot_basis}'"
        )

    currency = normalize_symbol(os.environ.get("ACCOUNT_CURRENCY", "USD"))
    if len(currency) != 3 or not currency.isalpha():
        raise ValueError(
            f"ACCOUNT_CURRENCY must be a 3-letter code, got '{currency}'"
        )

    raw_port = os.environ.get("API_PORT", "8080")
    try:
        api_port = int(raw_port)
    except ValueError:
        raise ValueError(f"API_PORT must be an integer, got '{raw_port}'") from None

    return Config(
        account_currency=currency,
        default_risk_pct=_float_var("DEFAULT_RISK_PCT", "1.0"),
        max_risk_pct=_float_var("MAX_RISK_PCT", "2.0"),
        settlement_lot_basis=lot_basis,
        rates_file=os.environ.get("RATES_FILE") or None,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        api_port=api_port,
    )


def load_rates_file(path: str) -> dict[str, float]:
    """Read ``{pair: rate}`` overrides from a JSON file.

    Pair names are normalized.  Raises ``ValueError`` on a missing file,
    malformed JSON, or a non-positive rate.
    """
    rates_path = pathlib.Path(path)
    if not rates_path.exists():
        raise ValueError(f"RATES_FILE not found: {path}")
    try:
        data = json.loads(rates_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"RATES_FILE is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("RATES_FILE must contain a JSON object of pair → rate")

    rates: dict[str, float] = {}
    for pair, rate in data.items():
        try:
            value = float(rate)
        except (TypeError, ValueError):
            raise ValueError(f"Rate for {pair} must be a number, got {rate!r}") from None
        if value <= 0:
            raise ValueError(f"Rate for {pair} must be positive, got {value}")
        rates[normalize_symbol(pair)] = value
    return rates


def build_reference_data(config: Config) -> ReferenceData:
    """Built-in tables with any ``RATES_FILE`` overrides merged in."""
    reference = default_reference_data()
    if config.rates_file:
        overrides = load_rates_file(config.rates_file)
        logger.info(
            "Loaded %d exchange-rate override(s) from %s",
            len(overrides), config.rates_file,
        )
        reference = reference.with_rates(overrides)
    return reference
