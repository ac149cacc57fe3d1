"""Instrument data models — typed reference data for pip valuation."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping


# Asset classes
FOREX = "forex"
METAL = "metal"
CRYPTO = "crypto"
COMMODITY = "commodity"
INDEX = "index"

ASSET_CLASSES = (FOREX, METAL, CRYPTO, COMMODITY, INDEX)

# Forex quote structures (non-forex pair types reuse the asset class tag)
DIRECT = "direct"
INDIRECT = "indirect"
CROSS = "cross"


@dataclass(frozen=True)
class InstrumentSpec:
    """Contract metadata for one tradable symbol."""

    asset_class: str  # one of ASSET_CLASSES
    contract_size: float  # units per standard lot
    pip_size: float  # price increment counted as one pip/point
    base_value: float  # per-pip value for commodity / index


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceData:
    """Immutable lookup tables the resolver and engine are built from.

    Args:
        specs: Normalized symbol → ``InstrumentSpec``.
        rates: Normalized pair → exchange rate snapshot.
        cross_fallback_rates: Quote currency → USD value of one unit,
            used only when a cross pair cannot be triangulated through
            ``rates``.
        default_spec: Spec for unknown non-JPY symbols.
        jpy_spec: Spec for unknown symbols containing ``"JPY"``.
        standard_lot: Units in one standard forex lot.
    """

    specs: Mapping[str, InstrumentSpec]
    rates: Mapping[str, float]
    cross_fallback_rates: Mapping[str, float]
    default_spec: InstrumentSpec
    jpy_spec: InstrumentSpec
    standard_lot: float = 100_000.0
    last_resort_pip_value: float = 10.0
    unit_names: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "specs", _frozen(self.specs))
        object.__setattr__(self, "rates", _frozen(self.rates))
        object.__setattr__(
            self, "cross_fallback_rates", _frozen(self.cross_fallback_rates)
        )
        object.__setattr__(self, "unit_names", _frozen(self.unit_names))

    def with_rates(self, rates: Mapping[str, float], merge: bool = True) -> "ReferenceData":
        """Return a copy with *rates* merged over (or replacing) the table."""
        new_rates = {**self.rates, **rates} if merge else dict(rates)
        return replace(self, rates=new_rates)

    def with_cross_fallback_rates(self, rates: Mapping[str, float]) -> "ReferenceData":
        """Return a copy with a different cross-pair fallback table."""
        return replace(self, cross_fallback_rates=dict(rates))
