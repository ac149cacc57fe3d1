"""Built-in instrument and exchange-rate reference tables.

Keys are normalized symbols (uppercase, no separators).  Rates are a static
snapshot, not live quotes.
"""

from pipledger.instruments.models import (
    COMMODITY,
    CRYPTO,
    FOREX,
    INDEX,
    METAL,
    InstrumentSpec,
    ReferenceData,
)

STANDARD_LOT = 100_000.0


# ── Instrument specs ─────────────────────────────────────────────────────

_GOLD = InstrumentSpec(METAL, contract_size=100, pip_size=0.01, base_value=1.0)
_SILVER = InstrumentSpec(METAL, contract_size=5000, pip_size=0.001, base_value=5.0)
_PLATINUM = InstrumentSpec(METAL, contract_size=50, pip_size=0.01, base_value=0.5)
_PALLADIUM = InstrumentSpec(METAL, contract_size=100, pip_size=0.01, base_value=1.0)

_COIN = InstrumentSpec(CRYPTO, contract_size=1, pip_size=0.01, base_value=0.01)
_ALTCOIN = InstrumentSpec(CRYPTO, contract_size=1, pip_size=0.0001, base_value=0.0001)

_CRUDE = InstrumentSpec(COMMODITY, contract_size=1000, pip_size=0.01, base_value=10)
_NATGAS = InstrumentSpec(COMMODITY, contract_size=10000, pip_size=0.001, base_value=10)

INSTRUMENT_SPECS: dict[str, InstrumentSpec] = {
    # Precious metals
    "XAUUSD": _GOLD,
    "XAGUSD": _SILVER,
    "XPTUSD": _PLATINUM,
    "XPDUSD": _PALLADIUM,
    # Cryptocurrencies
    "BTCUSD": _COIN,
    "ETHUSD": _COIN,
    "LTCUSD": _COIN,
    "XRPUSD": _ALTCOIN,
    "ADAUSD": _ALTCOIN,
    # Energy
    "CLUSD": _CRUDE,
    "CRUSD": _CRUDE,
    "BRENTUSD": _CRUDE,
    "UKOIL": _CRUDE,
    "NGUSD": _NATGAS,
    "NGAS": _NATGAS,
    # Indices
    "SPX500": InstrumentSpec(INDEX, contract_size=1, pip_size=0.1, base_value=0.1),
    "US500": InstrumentSpec(INDEX, contract_size=1, pip_size=0.1, base_value=0.1),
    "NAS100": InstrumentSpec(INDEX, contract_size=1, pip_size=0.25, base_value=0.25),
    "US100": InstrumentSpec(INDEX, contract_size=1, pip_size=0.25, base_value=0.25),
    "GER40": InstrumentSpec(INDEX, contract_size=1, pip_size=0.5, base_value=0.5),
    "DE40": InstrumentSpec(INDEX, contract_size=1, pip_size=0.5, base_value=0.5),
    "UK100": InstrumentSpec(INDEX, contract_size=1, pip_size=0.5, base_value=0.5),
    "JPN225": InstrumentSpec(INDEX, contract_size=1, pip_size=1, base_value=1),
    "JP225": InstrumentSpec(INDEX, contract_size=1, pip_size=1, base_value=1),
}

DEFAULT_FOREX_SPEC = InstrumentSpec(
    FOREX, contract_size=STANDARD_LOT, pip_size=0.0001, base_value=0.0001,
)
JPY_FOREX_SPEC = InstrumentSpec(
    FOREX, contract_size=STANDARD_LOT, pip_size=0.01, base_value=0.01,
)


# ── Exchange rates ───────────────────────────────────────────────────────

EXCHANGE_RATES: dict[str, float] = {
    "EURUSD": 1.0850,
    "GBPUSD": 1.2650,
    "AUDUSD": 0.6750,
    "NZDUSD": 0.6150,
    "USDJPY": 149.50,
    "USDCAD": 1.3650,
    "USDCHF": 0.8950,
    "EURGBP": 0.8580,
    "EURJPY": 162.25,
    "GBPJPY": 189.15,
    "AUDJPY": 100.91,
    "EURCHF": 0.9720,
    "GBPCHF": 1.1325,
    "XAUUSD": 2045.50,
    "XAGUSD": 24.15,
    "XPTUSD": 892.30,
    "XPDUSD": 1156.80,
    "BTCUSD": 43250.00,
    "ETHUSD": 2485.30,
    "LTCUSD": 73.25,
    "XRPUSD": 0.6234,
    "ADAUSD": 0.4892,
    "CLUSD": 75.85,
    "CRUSD": 75.85,
    "BRENTUSD": 80.20,
    "UKOIL": 80.20,
    "NGUSD": 2.651,
    "NGAS": 2.651,
    "SPX500": 4725.80,
    "US500": 4725.80,
    "NAS100": 16845.30,
    "US100": 16845.30,
    "GER40": 16380.50,
    "DE40": 16380.50,
    "UK100": 7630.25,
    "JPN225": 33245.50,
    "JP225": 33245.50,
}

# USD value of one unit of the quote currency, used for cross pairs whose
# quote currency has neither a QUOTE/USD nor a USD/QUOTE rate.
CROSS_FALLBACK_RATES: dict[str, float] = {
    "EUR": 1.085,
    "GBP": 1.265,
    "JPY": 1 / 149.5,
}


# ── Contract unit names ──────────────────────────────────────────────────

# Asset class → (symbol fragment → unit name), checked in order; the
# "" entry is the class default.
UNIT_NAMES: dict[str, dict[str, str]] = {
    METAL: {
        "XAU": "oz (gold)",
        "XAG": "oz (silver)",
        "XPT": "oz (platinum)",
        "XPD": "oz (palladium)",
        "": "oz",
    },
    CRYPTO: {
        "BTC": "BTC",
        "ETH": "ETH",
        "LTC": "LTC",
        "XRP": "XRP",
        "ADA": "ADA",
        "": "coins",
    },
    COMMODITY: {
        "CL": "barrels",
        "BRENT": "barrels",
        "CRUDE": "barrels",
        "UKOIL": "barrels",
        "NG": "MMBtu",
        "": "units",
    },
    INDEX: {"": "contracts"},
    FOREX: {"": "currency units"},
}


def default_reference_data() -> ReferenceData:
    """Build the ``ReferenceData`` object from the built-in tables."""
    return ReferenceData(
        specs=INSTRUMENT_SPECS,
        rates=EXCHANGE_RATES,
        cross_fallback_rates=CROSS_FALLBACK_RATES,
        default_spec=DEFAULT_FOREX_SPEC,
        jpy_spec=JPY_FOREX_SPEC,
        standard_lot=STANDARD_LOT,
        unit_names=UNIT_NAMES,
    )
