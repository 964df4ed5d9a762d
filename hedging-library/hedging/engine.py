"""
Pricing engine: computes the premium of hedge legs under a market snapshot.

Design intent:
- Legs and strategies are **data only** (no market access, no pricing methods).
- This engine uses a **registry of pricers** for dispatch, one per instrument family.
- A leg nobody can price raises UnsupportedInstrument; there is no silent 0.
"""

from __future__ import annotations

import logging
from typing import Optional

from hedging.errors import UnsupportedInstrument
from hedging.market import MarketModel
from hedging.pricers import BasePricer, ForwardPricer
from hedging.products import InstrumentLeg, Strategy
from hedging.settings import PricingSettings

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Registry-based pricing engine.

    Pricers are registered at initialization and dispatched based on
    can_price() checks. First matching pricer wins.
    """

    def __init__(self) -> None:
        self._pricers: list[BasePricer] = []

    def register(self, pricer: BasePricer) -> None:
        """Register a pricer for dispatch.

        Order matters: first matching pricer wins.
        """
        self._pricers.append(pricer)

    def pricer_for(self, leg: InstrumentLeg) -> BasePricer:
        for pricer in self._pricers:
            if pricer.can_price(leg):
                return pricer
        raise UnsupportedInstrument(
            f"No pricer registered for {leg.type.value} legs. "
            "Register a pricer with engine.register(pricer)."
        )

    @staticmethod
    def leg_market(leg: InstrumentLeg, market: MarketModel) -> MarketModel:
        """Market as seen by `leg`: its own volatility / time to payoff win when set."""
        if leg.volatility is not None:
            market = market.with_volatility(leg.volatility)
        if leg.time_to_payoff is not None:
            market = market.with_time(leg.time_to_payoff)
        return market

    def price_leg(self, leg: InstrumentLeg, market: MarketModel) -> float:
        """Premium per unit of notional for one leg."""
        pricer = self.pricer_for(leg)
        leg_market = self.leg_market(leg, market)
        # Resolve levels up front so malformed strikes fail before any model runs.
        leg.resolve(leg_market.spot)
        premium = pricer.premium(leg, leg_market)
        logger.debug(
            "priced %s with %s: %.6g (spot=%s, vol=%s, t=%s)",
            leg.type.value,
            pricer.describe(),
            premium,
            leg_market.spot,
            leg_market.volatility,
            leg_market.time_to_maturity,
        )
        return premium

    def price_strategy(self, strategy: Strategy, market: MarketModel) -> list[float]:
        """Per-leg premiums, in leg order."""
        return [self.price_leg(leg, market) for leg in strategy]

    def forward_rate(self, leg: InstrumentLeg, market: MarketModel) -> float:
        """Fixed rate a forward or swap leg locks in under `market`."""
        pricer = self.pricer_for(leg)
        if not isinstance(pricer, ForwardPricer):
            raise UnsupportedInstrument(f"{leg.type.value} legs have no fixed forward rate")
        return pricer.fixed_rate(leg, self.leg_market(leg, market))


def create_default_engine(settings: Optional[PricingSettings] = None) -> PricingEngine:
    """Factory for default engine with all built-in pricers registered."""
    from hedging.pricers import BarrierPricer, DigitalPricer, VanillaPricer

    settings = settings or PricingSettings()
    engine = PricingEngine()
    engine.register(ForwardPricer())
    engine.register(
        VanillaPricer(
            model=settings.vanilla_model,
            n_sims=settings.n_sims,
            seed=settings.seed,
            max_std_error=settings.max_std_error,
        )
    )
    engine.register(
        BarrierPricer(
            model=settings.barrier_model,
            n_sims=settings.n_sims,
            seed=settings.seed,
            min_steps=settings.min_steps,
            max_step_variance=settings.max_step_variance,
            max_std_error=settings.max_std_error,
        )
    )
    engine.register(
        DigitalPricer(
            n_sims=settings.digital_n_sims,
            seed=settings.seed,
            min_steps=settings.min_steps,
            max_step_variance=settings.max_step_variance,
            max_std_error=settings.max_std_error,
        )
    )
    logger.debug("default engine: %s", settings)
    return engine
