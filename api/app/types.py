"""GraphQL types for the hedging valuation API."""

from __future__ import annotations

from typing import Optional

import strawberry

from hedging.payoff import LevelAnchor as _LevelAnchor
from hedging.products import LevelKind as _LevelKind

LevelKind = strawberry.enum(_LevelKind, name="LevelKind", description="Absolute rate or percent of spot.")
LevelAnchor = strawberry.enum(
    _LevelAnchor, name="LevelAnchor", description="Spot that percent levels resolve against on the curve."
)


# --- Input types (request payloads) ---


@strawberry.input
class LevelInput:
    """Strike or barrier level: absolute rate, or percent of spot (100 = at the money)."""

    value: float
    kind: LevelKind = _LevelKind.ABSOLUTE


@strawberry.input
class MarketModelInput:
    """Market snapshot: spot, continuously compounded rates, volatility, time in years."""

    spot: float
    domestic_rate: float
    foreign_rate: float
    volatility: float
    time_to_maturity: float


@strawberry.input
class InstrumentLegInput:
    """
    One hedge leg. `type` is the instrument name: forward, swap, call, put,
    knockoutCall, knockoutPut, knockinCall, knockinPut, oneTouch, noTouch,
    doubleTouch, doubleNoTouch, rangeBinary, outsideBinary.
    """

    type: str
    strike: Optional[LevelInput] = None
    barrier: Optional[LevelInput] = None
    second_barrier: Optional[LevelInput] = None
    rebate: float = 5.0
    volatility: Optional[float] = None
    quantity: float = 100.0
    time_to_payoff: Optional[float] = None


@strawberry.input
class StrategyInput:
    """Ordered legs of one hedge."""

    legs: list[InstrumentLegInput]
    name: str = ""


# --- Output types (response payloads) ---


@strawberry.type
class LegPricingResult:
    """Premium per unit of notional; signed premium is negative for sold legs."""

    premium: float
    signed_premium: float
    forward_rate: Optional[float] = None


@strawberry.type
class StrategyPricingResult:
    """Per-leg premiums in leg order and their signed sum."""

    premiums: list[float]
    net_premium: float


@strawberry.type(name="PayoffCurvePoint")
class PayoffPoint:
    spot: float
    unhedged_rate: float
    hedged_rate: float


@strawberry.type
class ForwardComponentsResult:
    """Commodity forward under cost of carry; positive basis is contango."""

    spot: float
    forward: float
    cost_of_carry: float
    time_to_maturity: float
    storage_cost: float
    convenience_yield: float
    basis: float
    is_contango: bool
