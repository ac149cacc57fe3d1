"""Pip valuation — pure math, no I/O.

Converts price distances into pips and pips into money for every asset
class in the reference tables.

Pip value per standard lot, by asset class::

    metal      1.0 (flat display value)
    crypto     pip_size × contract_size
    commodity  base_value
    index      base_value
    forex      direct    pip_size × contract_size
               indirect  pip_size / rate × contract_size
               cross     triangulated through the quote currency's USD rate

Risk and profit for metals skip pips entirely and use
``|price move| × lots × contract_size``.
"""

import logging
import math
from typing import Optional

from pipledger.instruments.models import (
    COMMODITY,
    CRYPTO,
    DIRECT,
    INDEX,
    INDIRECT,
    METAL,
    InstrumentSpec,
)
from pipledger.instruments.resolver import InstrumentResolver, normalize_symbol

logger = logging.getLogger("pipledger")

METAL_DISPLAY_PIP_VALUE = 1.0


def all_positive(*values) -> bool:
    """``True`` when every value is a finite number greater than zero.

    ``None``, NaN, infinities, and non-numeric values count as non-positive.
    """
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return False
        if not math.isfinite(v) or v <= 0:
            return False
    return True


class ValuationEngine:
    """Computes pip values, risk amounts, and potential profits.

    Args:
        resolver: Source of instrument specs and rates.  A resolver over
            the built-in tables is created when omitted.
    """

    def __init__(self, resolver: Optional[InstrumentResolver] = None) -> None:
        self._resolver = resolver if resolver is not None else InstrumentResolver()

    @property
    def resolver(self) -> InstrumentResolver:
        return self._resolver

    # ── Pip value ────────────────────────────────────────────────────────

    def pip_value(self, symbol, account_currency: str = "USD") -> float:
        """Monetary value of one pip on one standard lot of *symbol*."""
        spec = self._resolver.resolve_spec(symbol)

        if spec.asset_class == METAL:
            usd = METAL_DISPLAY_PIP_VALUE
        elif spec.asset_class == CRYPTO:
            usd = spec.pip_size * spec.contract_size
        elif spec.asset_class in (COMMODITY, INDEX):
            usd = spec.base_value
        else:
            usd = self._forex_pip_value(symbol, spec)

        return self._to_account_currency(usd, account_currency)

    def _forex_pip_value(self, symbol, spec: InstrumentSpec) -> float:
        pair_type = self._resolver.resolve_pair_type(symbol)
        if pair_type == DIRECT:
            return spec.pip_size * spec.contract_size
        if pair_type == INDIRECT:
            rate = self._resolver.resolve_exchange_rate(symbol)
            return (spec.pip_size / rate) * spec.contract_size
        return self._cross_pip_value(symbol, spec)

    def _cross_pip_value(self, symbol, spec: InstrumentSpec) -> float:
        """Triangulate a cross pair's pip value through its quote currency.

        Order: QUOTE/USD rate, inverted USD/QUOTE rate, the cross fallback
        table, then the last-resort constant.
        """
        quote = self._resolver.quote_currency(symbol)
        pip_notional = spec.pip_size * spec.contract_size

        quote_usd = self._resolver.find_rate(f"{quote}USD")
        if quote_usd and quote_usd > 0:
            return pip_notional * quote_usd

        usd_quote = self._resolver.find_rate(f"USD{quote}")
        if usd_quote and usd_quote > 0:
            return pip_notional / usd_quote

        reference = self._resolver.reference
        fallback = reference.cross_fallback_rates.get(quote)
        if fallback is not None:
            logger.debug("Cross %s: using fallback rate for %s", symbol, quote)
            return pip_notional * fallback

        logger.debug("Cross %s: no rate for %r, using last-resort value", symbol, quote)
        return reference.last_resort_pip_value

    def _to_account_currency(self, usd_amount: float, account_currency: str) -> float:
        """Convert a USD amount through the rate table.

        Uses USD/ACC (multiply) then ACC/USD (divide); returns the USD
        amount unchanged when the table has neither.
        """
        currency = normalize_symbol(account_currency) or "USD"
        if currency == "USD":
            return usd_amount

        usd_acc = self._resolver.find_rate(f"USD{currency}")
        if usd_acc and usd_acc > 0:
            return usd_amount * usd_acc
        acc_usd = self._resolver.find_rate(f"{currency}USD")
        if acc_usd and acc_usd > 0:
            return usd_amount / acc_usd

        logger.debug("No USD rate for account currency %s, leaving value in USD", currency)
        return usd_amount

    # ── Distances ────────────────────────────────────────────────────────

    @staticmethod
    def pips_distance(spec: InstrumentSpec, price_distance: float) -> float:
        """Express *price_distance* in pips of *spec*."""
        return price_distance / spec.pip_size

    # ── Money at risk / at stake ─────────────────────────────────────────

    def risk_amount(
        self,
        symbol,
        lot_size: float,
        entry_price: float,
        stop_price: float,
        account_currency: str = "USD",
    ) -> float:
        """Money lost if price moves from *entry_price* to *stop_price*.

        Returns 0.0 when any of lot size, entry, or stop is non-positive.
        """
        return self._money_between(
            symbol, lot_size, entry_price, stop_price, account_currency,
        )

    def potential_profit(
        self,
        symbol,
        lot_size: float,
        entry_price: float,
        target_price: float,
        account_currency: str = "USD",
    ) -> float:
        """Money made if price moves from *entry_price* to *target_price*.

        Returns 0.0 when any of lot size, entry, or target is non-positive.
        """
        return self._money_between(
            symbol, lot_size, entry_price, target_price, account_currency,
        )

    def per_lot_risk(
        self,
        symbol,
        price_distance: float,
        account_currency: str = "USD",
    ) -> float:
        """Money moved by *price_distance* on one standard lot."""
        spec = self._resolver.resolve_spec(symbol)
        if spec.asset_class == METAL:
            return self._to_account_currency(
                price_distance * spec.contract_size, account_currency,
            )
        pips = self.pips_distance(spec, price_distance)
        return pips * self.pip_value(symbol, account_currency)

    def _money_between(
        self,
        symbol,
        lot_size: float,
        price_a: float,
        price_b: float,
        account_currency: str,
    ) -> float:
        if not all_positive(lot_size, price_a, price_b):
            return 0.0
        money = lot_size * self.per_lot_risk(
            symbol, abs(price_a - price_b), account_currency,
        )
        if not math.isfinite(money):
            logger.debug("Money figure for %s overflowed, returning 0.0", symbol)
            return 0.0
        return money
