"""Pricer for touch and binary options."""

from __future__ import annotations

from typing import Optional

from hedging.market import MarketModel
from hedging.models.digital import digital_monte_carlo
from hedging.models.simulation import DEFAULT_MAX_STEP_VARIANCE, DEFAULT_MIN_STEPS
from hedging.pricers.base import BasePricer
from hedging.products.leg import InstrumentLeg


class DigitalPricer(BasePricer):
    """Monte-Carlo digitals. The leg's rebate is a percent of notional."""

    def __init__(
        self,
        n_sims: int = 10000,
        seed: Optional[int] = None,
        min_steps: int = DEFAULT_MIN_STEPS,
        max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
        max_std_error: Optional[float] = None,
    ) -> None:
        self.n_sims = n_sims
        self.seed = seed
        self.min_steps = min_steps
        self.max_step_variance = max_step_variance
        self.max_std_error = max_std_error

    def can_price(self, leg: InstrumentLeg) -> bool:
        return leg.type.is_digital

    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        levels = leg.resolve(market.spot)
        return digital_monte_carlo(
            leg.type,
            market.spot,
            levels.strike,
            market.domestic_rate,
            market.time_to_maturity,
            market.volatility,
            barrier=levels.barrier,
            second_barrier=levels.second_barrier,
            n_sims=self.n_sims,
            rebate=leg.rebate / 100.0,
            foreign_rate=market.foreign_rate,
            seed=self.seed,
            min_steps=self.min_steps,
            max_step_variance=self.max_step_variance,
            max_std_error=self.max_std_error,
        )
