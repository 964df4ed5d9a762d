"""Products: strike/barrier levels, instrument legs, strategies."""

from hedging.products.leg import InstrumentLeg, InstrumentType
from hedging.products.levels import BarrierSpec, Level, LevelKind, StrikeSpec
from hedging.products.strategy import Strategy

__all__ = [
    "BarrierSpec",
    "InstrumentLeg",
    "InstrumentType",
    "Level",
    "LevelKind",
    "Strategy",
    "StrikeSpec",
]
