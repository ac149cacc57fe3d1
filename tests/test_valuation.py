"""Tests for pipledger.risk.valuation — pip values, distances, risk and profit.

Covers every asset-class branch of pip_value, forex quote structures
including cross-pair triangulation fallbacks, account-currency conversion,
and the non-positive input guards.
"""

import math

import pytest

from pipledger.instruments.resolver import InstrumentResolver
from pipledger.instruments.tables import DEFAULT_FOREX_SPEC, JPY_FOREX_SPEC, default_reference_data
from pipledger.risk.valuation import ValuationEngine, all_positive


def _engine_with_rates(rates: dict, merge: bool = True) -> ValuationEngine:
    ref = default_reference_data().with_rates(rates, merge=merge)
    return ValuationEngine(InstrumentResolver(ref))


@pytest.fixture
def engine():
    return ValuationEngine()


# ── Pip value: forex ─────────────────────────────────────────────────────


class TestForexPipValue:
    def test_eur_usd_direct(self, engine):
        """0.0001 pip × 100,000 units → $10 per pip."""
        assert engine.pip_value("EUR/USD") == pytest.approx(10.0)

    def test_usd_jpy_indirect(self, engine):
        """0.01 / 149.50 × 100,000 ≈ $6.689 per pip."""
        assert engine.pip_value("USD/JPY") == pytest.approx(6.689, abs=1e-3)

    @pytest.mark.parametrize("symbol", ["EUR/USD", "GBP/USD", "AUD/USD", "NZD/USD", "ZZZ/USD"])
    def test_direct_independent_of_rates(self, symbol):
        base = ValuationEngine().pip_value(symbol)
        skewed = _engine_with_rates({"EURUSD": 3.0, "GBPUSD": 0.1, "AUDUSD": 7.0,
                                     "NZDUSD": 2.0, "ZZZUSD": 5.0})
        assert skewed.pip_value(symbol) == pytest.approx(base)
        assert base == pytest.approx(10.0)

    @pytest.mark.parametrize("symbol, rate", [("USD/CAD", 1.365), ("USD/CHF", 0.895), ("USD/JPY", 149.5)])
    def test_indirect_inversely_proportional_to_rate(self, symbol, rate):
        pair = symbol.replace("/", "")
        at_rate = _engine_with_rates({pair: rate}).pip_value(symbol)
        at_double = _engine_with_rates({pair: rate * 2}).pip_value(symbol)
        assert at_double == pytest.approx(at_rate / 2)
        assert at_rate * rate == pytest.approx(at_double * rate * 2)

    def test_unknown_indirect_uses_neutral_rate(self, engine):
        # USD/SEK has no rate → 1.0 → 0.0001 × 100,000
        assert engine.pip_value("USD/SEK") == pytest.approx(10.0)


class TestCrossPipValue:
    def test_quote_usd_rate_multiplies(self, engine):
        # EUR/GBP quote GBP → GBP/USD 1.265
        assert engine.pip_value("EUR/GBP") == pytest.approx(12.65)

    def test_usd_quote_rate_divides(self, engine):
        # GBP/JPY quote JPY → USD/JPY 149.50
        assert engine.pip_value("GBP/JPY") == pytest.approx(1000 / 149.5)

    def test_eur_chf_via_usd_chf(self, engine):
        assert engine.pip_value("EUR/CHF") == pytest.approx(10 / 0.895)

    def test_fallback_table_for_gbp_quote(self):
        engine = _engine_with_rates({}, merge=False)
        assert engine.pip_value("EUR/GBP") == pytest.approx(12.65)

    def test_fallback_table_for_eur_quote(self):
        engine = _engine_with_rates({}, merge=False)
        assert engine.pip_value("GBP/EUR") == pytest.approx(10.85)

    def test_fallback_table_for_jpy_quote(self):
        engine = _engine_with_rates({}, merge=False)
        assert engine.pip_value("EUR/JPY") == pytest.approx(1000 / 149.5)

    def test_last_resort_constant(self):
        engine = _engine_with_rates({}, merge=False)
        assert engine.pip_value("EUR/SEK") == 10.0

    def test_fallback_table_is_swappable(self):
        ref = (
            default_reference_data()
            .with_rates({}, merge=False)
            .with_cross_fallback_rates({"GBP": 2.0})
        )
        engine = ValuationEngine(InstrumentResolver(ref))
        assert engine.pip_value("EUR/GBP") == pytest.approx(20.0)
        # EUR no longer has a fallback entry
        assert engine.pip_value("GBP/EUR") == 10.0


# ── Pip value: other asset classes ───────────────────────────────────────


class TestNonForexPipValue:
    @pytest.mark.parametrize("symbol", ["XAU/USD", "XAG/USD", "XPT/USD", "XPD/USD"])
    def test_metal_flat_display_value(self, engine, symbol):
        assert engine.pip_value(symbol) == 1.0

    def test_crypto_pip_size_times_contract(self, engine):
        assert engine.pip_value("BTC/USD") == pytest.approx(0.01)
        assert engine.pip_value("XRPUSD") == pytest.approx(0.0001)

    def test_commodity_base_value(self, engine):
        assert engine.pip_value("CL/USD") == 10
        assert engine.pip_value("NGAS") == 10

    def test_index_base_value(self, engine):
        assert engine.pip_value("NAS100") == 0.25
        assert engine.pip_value("JPN225") == 1

    def test_commodity_ignores_rates(self):
        engine = _engine_with_rates({"CLUSD": 999.0})
        assert engine.pip_value("CL/USD") == 10


# ── Account currency ─────────────────────────────────────────────────────


class TestAccountCurrency:
    def test_usd_is_unchanged(self, engine):
        assert engine.pip_value("EUR/USD", "usd") == pytest.approx(10.0)

    def test_converts_through_usd_quote_rate(self, engine):
        assert engine.pip_value("EUR/USD", "JPY") == pytest.approx(1495.0)

    def test_converts_through_inverse_rate(self, engine):
        assert engine.pip_value("EUR/USD", "EUR") == pytest.approx(10 / 1.085)

    def test_unknown_account_currency_stays_usd(self, engine):
        assert engine.pip_value("EUR/USD", "XYZ") == pytest.approx(10.0)

    def test_empty_account_currency_means_usd(self, engine):
        assert engine.pip_value("EUR/USD", "") == pytest.approx(10.0)


# ── Distances ────────────────────────────────────────────────────────────


class TestPipsDistance:
    def test_default_forex(self):
        assert ValuationEngine.pips_distance(DEFAULT_FOREX_SPEC, 0.0050) == pytest.approx(50.0)

    def test_jpy_forex(self):
        assert ValuationEngine.pips_distance(JPY_FOREX_SPEC, 0.50) == pytest.approx(50.0)


# ── Risk amount / potential profit ───────────────────────────────────────


class TestRiskAmount:
    def test_forex_one_lot_fifty_pips(self, engine):
        """1 lot × 50 pips × $10 = $500."""
        assert engine.risk_amount("EUR/USD", 1.0, 1.1000, 1.0950) == pytest.approx(500.0)

    def test_fractional_lot(self, engine):
        assert engine.risk_amount("EUR/USD", 0.1, 1.1000, 1.0970) == pytest.approx(30.0)

    def test_metal_bypasses_pips(self, engine):
        """XAU: $10 move × 0.5 lot × 100 oz = $500."""
        assert engine.risk_amount("XAU/USD", 0.5, 2000.0, 1990.0) == pytest.approx(500.0)

    def test_crypto(self, engine):
        """BTC: $1,000 move = 100,000 pips × $0.01 × 2 lots = $2,000."""
        assert engine.risk_amount("BTC/USD", 2.0, 43000.0, 42000.0) == pytest.approx(2000.0)

    def test_commodity(self, engine):
        """CL: 0.50 move = 50 pips × $10 = $500."""
        assert engine.risk_amount("CL/USD", 1.0, 75.00, 74.50) == pytest.approx(500.0)

    def test_direction_does_not_matter(self, engine):
        below = engine.risk_amount("EUR/USD", 1.0, 1.1000, 1.0950)
        above = engine.risk_amount("EUR/USD", 1.0, 1.1000, 1.1050)
        assert below == pytest.approx(above)

    @pytest.mark.parametrize("lot, entry, stop", [
        (0, 1.1, 1.09),
        (-1, 1.1, 1.09),
        (1, 0, 1.09),
        (1, -1.1, 1.09),
        (1, 1.1, 0),
        (1, 1.1, -1.09),
        (None, 1.1, 1.09),
        (1, math.nan, 1.09),
    ])
    def test_non_positive_inputs_yield_zero(self, engine, lot, entry, stop):
        assert engine.risk_amount("EUR/USD", lot, entry, stop) == 0.0
        assert engine.potential_profit("EUR/USD", lot, entry, stop) == 0.0

    def test_non_positive_guard_applies_to_metals(self, engine):
        assert engine.risk_amount("XAU/USD", 0, 2000.0, 1990.0) == 0.0
        assert engine.potential_profit("XAU/USD", 1, 2000.0, 0) == 0.0

    def test_overflowing_result_yields_zero(self, engine):
        """1e306 lots × $1,000 per lot overflows a float."""
        assert engine.risk_amount("EUR/USD", 1e306, 1.1, 1.09) == 0.0
        assert engine.potential_profit("EUR/USD", 1e306, 1.1, 1.11) == 0.0
        assert engine.risk_amount("XAU/USD", 1e306, 2000.0, 1990.0) == 0.0


class TestPotentialProfit:
    def test_forex(self, engine):
        assert engine.potential_profit("EUR/USD", 1.0, 1.1000, 1.1100) == pytest.approx(1000.0)

    def test_jpy_pair(self, engine):
        # 50 pips × 6.689 × 1 lot
        expected = 50 * (0.01 / 149.5) * 100_000
        assert engine.potential_profit("USD/JPY", 1.0, 149.50, 150.00) == pytest.approx(expected)

    @pytest.mark.parametrize("symbol, a, b", [
        ("EUR/USD", 1.1000, 1.0950),
        ("USD/JPY", 149.50, 148.20),
        ("EUR/GBP", 0.8580, 0.8610),
        ("XAU/USD", 2045.5, 2031.25),
        ("BTC/USD", 43250.0, 44100.0),
        ("NAS100", 16845.3, 16800.0),
        ("ZZZ/JPY", 120.0, 121.5),
    ])
    def test_symmetric_with_risk_amount(self, engine, symbol, a, b):
        assert engine.risk_amount(symbol, 0.7, a, b) == pytest.approx(
            engine.potential_profit(symbol, 0.7, b, a)
        )


class TestAllPositive:
    def test_accepts_positive_numbers(self):
        assert all_positive(1, 0.5, 3.0)

    @pytest.mark.parametrize("bad", [0, -1, None, "1", math.inf, math.nan, True])
    def test_rejects(self, bad):
        assert not all_positive(1.0, bad)
