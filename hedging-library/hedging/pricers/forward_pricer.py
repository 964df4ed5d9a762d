"""Pricer for forwards and swaps (zero upfront premium)."""

from __future__ import annotations

from hedging.market import MarketModel
from hedging.models.forward import forward_rate
from hedging.pricers.base import BasePricer
from hedging.products.leg import InstrumentLeg


class ForwardPricer(BasePricer):
    """Linear legs cost nothing upfront; their value is the rate they lock in."""

    def can_price(self, leg: InstrumentLeg) -> bool:
        return leg.type.is_linear

    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        return 0.0

    def fixed_rate(self, leg: InstrumentLeg, market: MarketModel) -> float:
        """CIP forward over the leg's horizon: S * exp((r_d - r_f) * t)."""
        return forward_rate(
            market.spot, market.domestic_rate, market.foreign_rate, market.time_to_maturity
        )
