"""Pricer for vanilla calls and puts."""

from __future__ import annotations

from typing import Optional

from hedging.errors import InvalidParameter
from hedging.market import MarketModel
from hedging.models.vanilla import garman_kohlhagen, vanilla_monte_carlo
from hedging.pricers.base import BasePricer
from hedging.products.leg import InstrumentLeg
from hedging.settings import VANILLA_MODELS


class VanillaPricer(BasePricer):
    """Garman-Kohlhagen by default; Monte-Carlo when model="monte-carlo"."""

    def __init__(
        self,
        model: str = "garman-kohlhagen",
        n_sims: int = 1000,
        seed: Optional[int] = None,
        max_std_error: Optional[float] = None,
    ) -> None:
        if model not in VANILLA_MODELS:
            raise InvalidParameter(f"vanilla model must be one of {VANILLA_MODELS}, got {model!r}")
        self.model = model
        self.n_sims = n_sims
        self.seed = seed
        self.max_std_error = max_std_error

    def can_price(self, leg: InstrumentLeg) -> bool:
        return leg.type.is_vanilla

    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        strike = leg.resolve(market.spot).strike
        args = (
            leg.type,
            market.spot,
            strike,
            market.domestic_rate,
            market.foreign_rate,
            market.time_to_maturity,
            market.volatility,
        )
        if self.model == "monte-carlo":
            return vanilla_monte_carlo(
                *args, n_sims=self.n_sims, seed=self.seed, max_std_error=self.max_std_error
            )
        return garman_kohlhagen(*args)

    def describe(self) -> str:
        return f"VanillaPricer({self.model})"
