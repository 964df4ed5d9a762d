"""Client-side types for the Hedging GraphQL API (mirror API contracts)."""

from dataclasses import dataclass, field
from typing import Optional

ABSOLUTE = "ABSOLUTE"
PERCENT_OF_SPOT = "PERCENT_OF_SPOT"


@dataclass
class LevelInput:
    """Strike or barrier: absolute rate, or percent of spot (kind=PERCENT_OF_SPOT)."""

    value: float
    kind: str = ABSOLUTE


@dataclass
class MarketModelInput:
    """Market snapshot: spot, continuously compounded rates, volatility, time in years."""

    spot: float
    domestic_rate: float
    foreign_rate: float
    volatility: float
    time_to_maturity: float


@dataclass
class InstrumentLegInput:
    """One hedge leg; `type` is the API instrument name (e.g. "knockoutCall")."""

    type: str
    strike: Optional[LevelInput] = None
    barrier: Optional[LevelInput] = None
    second_barrier: Optional[LevelInput] = None
    rebate: float = 5.0
    volatility: Optional[float] = None
    quantity: float = 100.0
    time_to_payoff: Optional[float] = None


@dataclass
class StrategyInput:
    legs: list[InstrumentLegInput] = field(default_factory=list)
    name: str = ""


@dataclass
class LegPricingResult:
    premium: float
    signed_premium: float
    forward_rate: Optional[float] = None


@dataclass
class StrategyPricingResult:
    premiums: list[float]
    net_premium: float


@dataclass
class PayoffCurvePoint:
    spot: float
    unhedged_rate: float
    hedged_rate: float


@dataclass
class ForwardComponents:
    spot: float
    forward: float
    cost_of_carry: float
    time_to_maturity: float
    storage_cost: float
    convenience_yield: float
    basis: float
    is_contango: bool
