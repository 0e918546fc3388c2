"""Selling price and net settlement calculator - Pure calculation logic."""

from __future__ import annotations
from typing import Dict

from pricing.models import Channel, RateConfig
from services.errors import InvalidRateError
from services.utils import to_number


class PriceCalculator:
    """
    Channel pricing over an explicit RateConfig.

    Store sales pay the bank commission on the VAT-inclusive price.
    Online sales pay the platform commission on the VAT-exclusive amount.
    The asymmetry is a business rule and shows up in net_settlement.
    """

    @staticmethod
    def _fee_factor(channel: Channel, rates: RateConfig) -> float:
        """Share of the price left after the channel commission."""
        rate = rates.commission_rate(channel)
        if rate >= 100:
            raise InvalidRateError(
                f"{channel.value} commission rate must be below 100 (got {rate})"
            )
        return 1 - rate / 100

    @staticmethod
    def _vat_factor(rates: RateConfig) -> float:
        factor = 1 + rates.kdv_rate / 100
        if factor <= 0:
            raise InvalidRateError(f"KDV rate must be above -100 (got {rates.kdv_rate})")
        return factor

    @staticmethod
    def selling_price(
        cost: float,
        margin_pct: float,
        channel: Channel,
        rates: RateConfig,
    ) -> float:
        """
        Price to list so the margin survives VAT and the channel fee.

        Raises:
            InvalidRateError: if the channel commission is 100 or more
        """
        base_price = to_number(cost) * (1 + to_number(margin_pct) / 100)
        gross_price = base_price * (1 + rates.kdv_rate / 100)
        return gross_price / PriceCalculator._fee_factor(channel, rates)

    @staticmethod
    def net_settlement(list_price: float, channel: Channel, rates: RateConfig) -> float:
        """
        Amount the seller keeps from a declared list price.

        Raises:
            InvalidRateError: if a rate makes the calculation undefined
        """
        price = to_number(list_price)
        fee_factor = PriceCalculator._fee_factor(channel, rates)
        if channel is Channel.STORE:
            return price * fee_factor
        return (price / PriceCalculator._vat_factor(rates)) * fee_factor

    @staticmethod
    def breakdown(
        cost: float,
        margin_pct: float,
        channel: Channel,
        rates: RateConfig,
    ) -> Dict[str, float]:
        """
        Calculate every step of a selling price.

        Returns:
            Dict with base/VAT/fee components, unrounded
        """
        cost = to_number(cost)
        margin_pct = to_number(margin_pct)
        base_price = cost * (1 + margin_pct / 100)
        gross_price = base_price * (1 + rates.kdv_rate / 100)
        selling_price = gross_price / PriceCalculator._fee_factor(channel, rates)

        return {
            "cost": cost,
            "margin_pct": margin_pct,
            "profit": base_price - cost,
            "base_price": base_price,
            "kdv_amount": gross_price - base_price,
            "gross_price": gross_price,
            "commission_rate": rates.commission_rate(channel),
            "commission_amount": selling_price - gross_price,
            "selling_price": selling_price,
        }

    @staticmethod
    def price_gap(selling_price: float, list_price: float) -> float:
        """Positive when the margin price is above the declared list price."""
        return to_number(selling_price) - to_number(list_price)
