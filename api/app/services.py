"""Service layer: convert GraphQL inputs to hedging library objects and run pricing / curves."""

from __future__ import annotations

import logging
from typing import Optional

from hedging.errors import InvalidParameter
from hedging.market import MarketModel
from hedging.models import forward_rate as cip_forward_rate
from hedging.models import forward_components as carry_forward_components
from hedging.models import implied_volatility as gk_implied_volatility
from hedging.payoff import LevelAnchor, PayoffCurveGenerator
from hedging.pricing import default_engine, forward_rate_for, price_leg as library_price_leg
from hedging.pricing import price_strategy as library_price_strategy
from hedging.products import BarrierSpec, InstrumentLeg, Strategy, StrikeSpec

from app.types import (
    ForwardComponentsResult,
    InstrumentLegInput,
    LegPricingResult,
    LevelInput,
    MarketModelInput,
    PayoffPoint,
    StrategyInput,
    StrategyPricingResult,
)

logger = logging.getLogger(__name__)


def market_from_input(m: MarketModelInput) -> MarketModel:
    """Build MarketModel from GraphQL MarketModelInput."""
    return MarketModel(
        spot=m.spot,
        domestic_rate=m.domestic_rate,
        foreign_rate=m.foreign_rate,
        volatility=m.volatility,
        time_to_maturity=m.time_to_maturity,
    )


def _strike(level: Optional[LevelInput]) -> Optional[StrikeSpec]:
    return None if level is None else StrikeSpec(value=level.value, kind=level.kind)


def _barrier(level: Optional[LevelInput]) -> Optional[BarrierSpec]:
    return None if level is None else BarrierSpec(value=level.value, kind=level.kind)


def leg_from_input(leg: InstrumentLegInput) -> InstrumentLeg:
    """Build InstrumentLeg from GraphQL InstrumentLegInput (validated on construction)."""
    return InstrumentLeg(
        type=leg.type,
        strike=_strike(leg.strike),
        barrier=_barrier(leg.barrier),
        second_barrier=_barrier(leg.second_barrier),
        rebate=leg.rebate,
        volatility=leg.volatility,
        quantity=leg.quantity,
        time_to_payoff=leg.time_to_payoff,
    )


def strategy_from_input(strategy: StrategyInput) -> Strategy:
    return Strategy(legs=[leg_from_input(leg) for leg in strategy.legs], name=strategy.name)


def forward_rate(market: MarketModelInput) -> float:
    """CIP forward for the market snapshot."""
    m = market_from_input(market)
    return cip_forward_rate(m.spot, m.domestic_rate, m.foreign_rate, m.time_to_maturity)


def forward_components(
    spot: float,
    rate: float,
    time_to_maturity: float,
    storage_cost: float = 0.0,
    convenience_yield: float = 0.0,
) -> ForwardComponentsResult:
    """Cost-of-carry forward breakdown for a commodity."""
    c = carry_forward_components(spot, rate, storage_cost, convenience_yield, time_to_maturity)
    return ForwardComponentsResult(
        spot=c.spot,
        forward=c.forward,
        cost_of_carry=c.cost_of_carry,
        time_to_maturity=c.time_to_maturity,
        storage_cost=c.storage_cost,
        convenience_yield=c.convenience_yield,
        basis=c.basis,
        is_contango=c.is_contango,
    )


def price_leg(leg: InstrumentLegInput, market: MarketModelInput) -> LegPricingResult:
    """Price one leg; forward/swap legs also report the rate they lock in."""
    instrument = leg_from_input(leg)
    m = market_from_input(market)
    premium = library_price_leg(instrument, m)
    fixed = forward_rate_for(instrument, m) if instrument.type.is_linear else None
    return LegPricingResult(
        premium=premium,
        signed_premium=premium if instrument.is_long else -premium,
        forward_rate=fixed,
    )


def price_strategy(strategy: StrategyInput, market: MarketModelInput) -> StrategyPricingResult:
    """Per-leg premiums and the net premium (paid for long legs, received for short)."""
    s = strategy_from_input(strategy)
    premiums = library_price_strategy(s, market_from_input(market))
    net = sum(p if leg.is_long else -p for leg, p in zip(s, premiums))
    logger.info("priced strategy %r: %d legs, net premium %.6g", s.name, len(s), net)
    return StrategyPricingResult(premiums=premiums, net_premium=net)


def payoff_curve(
    strategy: StrategyInput,
    reference_spot: float,
    include_premium: bool = False,
    premiums: Optional[list[float]] = None,
    real_premium: Optional[float] = None,
    market: Optional[MarketModelInput] = None,
    anchor: LevelAnchor = LevelAnchor.SCENARIO,
    decimals: Optional[int] = None,
) -> list[PayoffPoint]:
    """Effective-rate curve; with a market and no explicit premiums, legs are priced at the reference spot."""
    if decimals is not None and decimals < 0:
        raise InvalidParameter("decimals must be >= 0")
    s = strategy_from_input(strategy)
    generator = PayoffCurveGenerator(pricing=default_engine(), anchor=anchor, decimals=decimals)
    points = generator.generate(
        s,
        reference_spot,
        include_premium=include_premium,
        premiums=premiums,
        real_premium=real_premium,
        market=market_from_input(market) if market is not None else None,
    )
    logger.info("payoff curve for %r: %d legs, %d points", s.name, len(s), len(points))
    return [
        PayoffPoint(spot=p.spot, unhedged_rate=p.unhedged_rate, hedged_rate=p.hedged_rate)
        for p in points
    ]


def implied_volatility(
    option_type: str,
    price: float,
    strike: float,
    market: MarketModelInput,
) -> float:
    """Garman-Kohlhagen implied volatility; the market's own volatility is ignored."""
    return gk_implied_volatility(
        option_type,
        price,
        market.spot,
        strike,
        market.domestic_rate,
        market.foreign_rate,
        market.time_to_maturity,
    )
