"""Pricer for knock-in / knock-out options."""

from __future__ import annotations

import logging
from typing import Optional

from hedging.errors import InvalidParameter
from hedging.market import MarketModel
from hedging.models.barrier import barrier_closed_form, barrier_monte_carlo
from hedging.models.simulation import DEFAULT_MAX_STEP_VARIANCE, DEFAULT_MIN_STEPS
from hedging.pricers.base import BasePricer
from hedging.products.leg import InstrumentLeg
from hedging.settings import BARRIER_MODELS

logger = logging.getLogger(__name__)


class BarrierPricer(BasePricer):
    """
    Reiner-Rubinstein closed form for single barriers (model="closed-form"),
    path simulation otherwise. Legs with a second barrier are always simulated.
    """

    def __init__(
        self,
        model: str = "closed-form",
        n_sims: int = 1000,
        seed: Optional[int] = None,
        min_steps: int = DEFAULT_MIN_STEPS,
        max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
        max_std_error: Optional[float] = None,
    ) -> None:
        if model not in BARRIER_MODELS:
            raise InvalidParameter(f"barrier model must be one of {BARRIER_MODELS}, got {model!r}")
        self.model = model
        self.n_sims = n_sims
        self.seed = seed
        self.min_steps = min_steps
        self.max_step_variance = max_step_variance
        self.max_std_error = max_std_error

    def can_price(self, leg: InstrumentLeg) -> bool:
        return leg.type.is_barrier

    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        levels = leg.resolve(market.spot)
        if self.model == "closed-form" and levels.second_barrier is None:
            return barrier_closed_form(
                leg.type,
                market.spot,
                levels.strike,
                market.domestic_rate,
                market.time_to_maturity,
                market.volatility,
                levels.barrier,
                foreign_rate=market.foreign_rate,
            )
        if levels.second_barrier is not None:
            logger.debug("%s has two barriers; pricing by simulation", leg.type.value)
        return barrier_monte_carlo(
            leg.type,
            market.spot,
            levels.strike,
            market.domestic_rate,
            market.time_to_maturity,
            market.volatility,
            levels.barrier,
            second_barrier=levels.second_barrier,
            n_sims=self.n_sims,
            foreign_rate=market.foreign_rate,
            seed=self.seed,
            min_steps=self.min_steps,
            max_step_variance=self.max_step_variance,
            max_std_error=self.max_std_error,
        )

    def describe(self) -> str:
        return f"BarrierPricer({self.model})"
