"""
Effective-rate curve of a hedge strategy over a spot range.

For each scenario spot s the unhedged rate is s itself; the hedged rate starts
at s and is overwritten leg by leg (see effects.apply_leg). Premiums are netted
afterwards when requested: paid for long legs, received for short ones.

Premium sources, first available wins:
1. an explicit per-leg `premiums` list,
2. a single `real_premium` used verbatim for every leg,
3. the injected pricing library, priced once at the reference spot,
4. the heuristic in effects.heuristic_premium.
Sources 1-3 are constant across the curve, so toggling `include_premium` shifts
the hedged curve by a constant.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from hedging.errors import InvalidParameter, PricingError
from hedging.interfaces import PricingLibrary
from hedging.market import MarketModel
from hedging.payoff.effects import apply_leg, heuristic_premium
from hedging.products import InstrumentLeg, Strategy

logger = logging.getLogger(__name__)


class LevelAnchor(str, Enum):
    """Spot that percent-of-spot strikes and barriers are resolved against."""

    SCENARIO = "scenario"
    REFERENCE = "reference"


@dataclass(frozen=True)
class PayoffCurvePoint:
    spot: float
    unhedged_rate: float
    hedged_rate: float


class PayoffCurveGenerator:
    """
    Sweeps `points` scenario spots evenly over [lower * ref, upper * ref].

    `pricing` is only consulted when a market is passed to generate() and no
    explicit premium was given. With `fallback_to_heuristic`, pricing errors
    are logged and replaced by the heuristic premium; otherwise they propagate.
    """

    def __init__(
        self,
        pricing: Optional[PricingLibrary] = None,
        points: int = 101,
        lower: float = 0.7,
        upper: float = 1.3,
        anchor: LevelAnchor = LevelAnchor.SCENARIO,
        decimals: Optional[int] = None,
        fallback_to_heuristic: bool = False,
    ) -> None:
        if points < 2:
            raise InvalidParameter(f"points must be >= 2, got {points}")
        if not 0 < lower < upper:
            raise InvalidParameter(f"need 0 < lower < upper, got {lower}, {upper}")
        self.pricing = pricing
        self.points = points
        self.lower = lower
        self.upper = upper
        self.anchor = LevelAnchor(anchor)
        self.decimals = decimals
        self.fallback_to_heuristic = fallback_to_heuristic

    def scenario_spots(self, reference_spot: float) -> list[float]:
        _check_reference(reference_spot)
        grid = np.linspace(self.lower * reference_spot, self.upper * reference_spot, self.points)
        return [float(s) for s in grid]

    def generate(
        self,
        strategy: Strategy,
        reference_spot: float,
        include_premium: bool = False,
        premiums: Optional[Sequence[float]] = None,
        *,
        real_premium: Optional[float] = None,
        market: Optional[MarketModel] = None,
    ) -> list[PayoffCurvePoint]:
        """Curve points in ascending spot order."""
        spots = self.scenario_spots(reference_spot)
        fixed = self._fixed_premiums(strategy, reference_spot, premiums, real_premium, market)
        return [
            self._point(strategy, s, reference_spot, include_premium, fixed) for s in spots
        ]

    def effective_rate(
        self,
        strategy: Strategy,
        spot: float,
        reference_spot: Optional[float] = None,
        include_premium: bool = False,
        premiums: Optional[Sequence[float]] = None,
        *,
        real_premium: Optional[float] = None,
        market: Optional[MarketModel] = None,
    ) -> float:
        """Hedged rate at a single scenario spot."""
        reference_spot = spot if reference_spot is None else reference_spot
        _check_reference(reference_spot)
        _check_reference(spot)
        fixed = self._fixed_premiums(strategy, reference_spot, premiums, real_premium, market)
        return self._point(strategy, spot, reference_spot, include_premium, fixed).hedged_rate

    def _fixed_premiums(
        self,
        strategy: Strategy,
        reference_spot: float,
        premiums: Optional[Sequence[float]],
        real_premium: Optional[float],
        market: Optional[MarketModel],
    ) -> list[Optional[float]]:
        """Per-leg premium constant over the curve, or None where the heuristic applies."""
        if premiums is not None:
            if len(premiums) != len(strategy):
                raise InvalidParameter(
                    f"got {len(premiums)} premiums for a strategy of {len(strategy)} legs"
                )
            return [float(p) for p in premiums]
        if real_premium is not None:
            return [float(real_premium)] * len(strategy)
        if market is None or self.pricing is None:
            return [None] * len(strategy)

        priced_market = market.with_spot(reference_spot)
        if not self.fallback_to_heuristic:
            return list(self.pricing.price_strategy(strategy, priced_market))
        fixed: list[Optional[float]] = []
        for leg in strategy:
            try:
                fixed.append(self.pricing.price_leg(leg, priced_market))
            except PricingError as exc:
                logger.warning(
                    "pricing %s failed (%s: %s); using heuristic premium",
                    leg.type.value,
                    exc.code,
                    exc.message,
                )
                fixed.append(None)
        return fixed

    def _levels_spot(self, spot: float, reference_spot: float) -> float:
        return spot if self.anchor is LevelAnchor.SCENARIO else reference_spot

    def _point(
        self,
        strategy: Strategy,
        spot: float,
        reference_spot: float,
        include_premium: bool,
        fixed: list[Optional[float]],
    ) -> PayoffCurvePoint:
        hedged = spot
        total_premium = 0.0
        level_spot = self._levels_spot(spot, reference_spot)
        for leg, premium in zip(strategy, fixed):
            levels = leg.resolve(level_spot)
            if premium is None:
                premium = heuristic_premium(leg, levels, spot)
            hedged = apply_leg(leg, levels, spot, hedged)
            total_premium += _signed(leg, premium)
        if include_premium and len(strategy) > 0:
            hedged += total_premium
        return PayoffCurvePoint(
            spot=self._round(spot),
            unhedged_rate=self._round(spot),
            hedged_rate=self._round(hedged),
        )

    def _round(self, value: float) -> float:
        return value if self.decimals is None else round(value, self.decimals)


def _signed(leg: InstrumentLeg, premium: float) -> float:
    return premium if leg.is_long else -premium


def _check_reference(spot: float) -> None:
    if not math.isfinite(spot) or spot <= 0:
        raise InvalidParameter(f"spot must be a positive number, got {spot}")


_default_generator = PayoffCurveGenerator()


def generate_curve(
    strategy: Strategy,
    reference_spot: float,
    include_premium: bool = False,
    premiums: Optional[Sequence[float]] = None,
    *,
    real_premium: Optional[float] = None,
) -> list[PayoffCurvePoint]:
    """101-point curve with the default generator (no pricing library)."""
    return _default_generator.generate(
        strategy, reference_spot, include_premium, premiums, real_premium=real_premium
    )


def effective_rate(
    strategy: Strategy,
    spot: float,
    reference_spot: Optional[float] = None,
    include_premium: bool = False,
    premiums: Optional[Sequence[float]] = None,
    *,
    real_premium: Optional[float] = None,
) -> float:
    """Hedged rate at one spot with the default generator."""
    return _default_generator.effective_rate(
        strategy, spot, reference_spot, include_premium, premiums, real_premium=real_premium
    )
