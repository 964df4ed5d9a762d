"""Payoff curve generation: hedged vs unhedged effective rate over a spot range."""

from hedging.payoff.curve import (
    LevelAnchor,
    PayoffCurveGenerator,
    PayoffCurvePoint,
    effective_rate,
    generate_curve,
)
from hedging.payoff.effects import apply_leg, heuristic_premium

__all__ = [
    "LevelAnchor",
    "PayoffCurveGenerator",
    "PayoffCurvePoint",
    "apply_leg",
    "effective_rate",
    "generate_curve",
    "heuristic_premium",
]
