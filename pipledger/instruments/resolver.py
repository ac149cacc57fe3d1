"""Instrument resolver — symbol → spec, pair type, and exchange rate.

Pure lookups over an injected ``ReferenceData``.  Every method is total:
unknown or malformed symbols resolve to a default forex spec and a neutral
rate of 1.0, never an exception.
"""

import logging
import re
from typing import Optional

from pipledger.instruments.models import (
    CROSS,
    DIRECT,
    FOREX,
    INDIRECT,
    InstrumentSpec,
    ReferenceData,
)
from pipledger.instruments.tables import default_reference_data

logger = logging.getLogger("pipledger")

_SEPARATORS = re.compile(r"[\s/_\-.]+")


def normalize_symbol(symbol) -> str:
    """Uppercase *symbol* and strip whitespace and ``/ _ - .`` separators.

    ``"eur/usd"``, ``"EUR_USD"`` and ``" EUR USD "`` all become ``"EURUSD"``.
    Anything that is not a string normalizes to ``""``.
    """
    if not isinstance(symbol, str):
        return ""
    return _SEPARATORS.sub("", symbol).upper()


class InstrumentResolver:
    """Maps symbols to reference data.

    Args:
        reference: Lookup tables.  Defaults to the built-in tables.
    """

    def __init__(self, reference: Optional[ReferenceData] = None) -> None:
        self._ref = reference if reference is not None else default_reference_data()

    @property
    def reference(self) -> ReferenceData:
        return self._ref

    # ── Specs ────────────────────────────────────────────────────────────

    def resolve_spec(self, symbol) -> InstrumentSpec:
        """Return the spec for *symbol*, falling back to a forex default.

        The JPY default (0.01 pip) is chosen when the normalized symbol
        contains ``"JPY"``; otherwise the 0.0001-pip default.
        """
        pair = normalize_symbol(symbol)
        spec = self._ref.specs.get(pair)
        if spec is not None:
            return spec
        logger.debug("No spec for %r, using default forex spec", pair)
        return self._ref.jpy_spec if "JPY" in pair else self._ref.default_spec

    def pip_size(self, symbol) -> float:
        return self.resolve_spec(symbol).pip_size

    def resolve_pair_type(self, symbol) -> str:
        """Classify *symbol* by quote structure.

        Non-forex instruments return their asset class.  Forex returns
        ``"direct"`` (USD quote), ``"indirect"`` (USD base) or ``"cross"``.
        """
        spec = self.resolve_spec(symbol)
        if spec.asset_class != FOREX:
            return spec.asset_class

        pair = normalize_symbol(symbol)
        if pair.endswith("USD"):
            return DIRECT
        if pair.startswith("USD"):
            return INDIRECT
        return CROSS

    # ── Rates ────────────────────────────────────────────────────────────

    def resolve_exchange_rate(self, symbol) -> float:
        """Return the snapshot rate for *symbol*, or 1.0 when unknown.

        Non-positive table entries are treated as unknown.
        """
        rate = self._ref.rates.get(normalize_symbol(symbol))
        if rate is None or rate <= 0:
            return 1.0
        return rate

    def find_rate(self, pair: str) -> Optional[float]:
        """Return the rate for an already-normalized *pair*, or ``None``."""
        return self._ref.rates.get(pair)

    # ── Descriptive helpers ──────────────────────────────────────────────

    @staticmethod
    def quote_currency(symbol) -> str:
        """Three-letter quote currency of a forex symbol (``""`` if too short)."""
        pair = normalize_symbol(symbol)
        return pair[-3:] if len(pair) >= 6 else ""

    def contract_unit(self, symbol) -> str:
        """Human-readable name of what one contract unit is."""
        spec = self.resolve_spec(symbol)
        pair = normalize_symbol(symbol)
        names = self._ref.unit_names.get(spec.asset_class, {})
        for fragment, name in names.items():
            if fragment and fragment in pair:
                return name
        return names.get("", "units")
