"""
Market model for a single valuation.

`MarketModel` is intentionally a *flat* snapshot of the inputs a hedge leg needs:
- spot rate (quote currency per unit of base / commodity)
- domestic and foreign continuously compounded risk-free rates
- a single volatility
- a time to maturity in year fractions

We keep this class small so that:
- instrument legs remain data-only
- pricing functions stay pure (market in -> number out)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from hedging.errors import InvalidParameter


@dataclass(frozen=True)
class MarketModel:
    """
    Market snapshot: spot, domestic/foreign rates, volatility, time to maturity.
    Immutable: with_spot / with_volatility / with_time return new instances.
    """

    spot: float
    domestic_rate: float
    foreign_rate: float
    volatility: float
    time_to_maturity: float

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not math.isfinite(self.spot) or self.spot <= 0:
            raise InvalidParameter(f"spot must be > 0, got {self.spot}")
        if not math.isfinite(self.volatility) or self.volatility < 0:
            raise InvalidParameter(f"volatility must be >= 0, got {self.volatility}")
        if not math.isfinite(self.time_to_maturity) or self.time_to_maturity <= 0:
            raise InvalidParameter(
                f"time_to_maturity must be > 0, got {self.time_to_maturity}"
            )
        if not (math.isfinite(self.domestic_rate) and math.isfinite(self.foreign_rate)):
            raise InvalidParameter("domestic_rate and foreign_rate must be finite")

    @classmethod
    def commodity(
        cls,
        spot: float,
        rate: float,
        volatility: float,
        time_to_maturity: float,
        storage_cost: float = 0.0,
        convenience_yield: float = 0.0,
    ) -> "MarketModel":
        """
        Commodity snapshot. The convenience yield net of storage plays the
        foreign rate, so r_d - r_f is the cost of carry r + storage - yield.
        """
        return cls(
            spot=spot,
            domestic_rate=rate,
            foreign_rate=convenience_yield - storage_cost,
            volatility=volatility,
            time_to_maturity=time_to_maturity,
        )

    @property
    def cost_of_carry(self) -> float:
        return self.domestic_rate - self.foreign_rate

    @property
    def forward(self) -> float:
        """Covered interest parity forward: S * exp((r_d - r_f) * t)."""
        return self.spot * math.exp(
            (self.domestic_rate - self.foreign_rate) * self.time_to_maturity
        )

    def with_spot(self, spot: float) -> "MarketModel":
        """Return a new MarketModel with the spot replaced."""
        return replace(self, spot=spot)

    def with_volatility(self, volatility: float) -> "MarketModel":
        """Return a new MarketModel with the volatility replaced."""
        return replace(self, volatility=volatility)

    def with_time(self, time_to_maturity: float) -> "MarketModel":
        """Return a new MarketModel with the time to maturity replaced."""
        return replace(self, time_to_maturity=time_to_maturity)
