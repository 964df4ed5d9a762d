"""
Per-leg effect on the effective rate at one static scenario spot.

Barrier and digital conditions are evaluated against the scenario spot itself,
not against a simulated path from the reference spot to it. The curve answers
"what rate do I get if spot ends up here", which is not the same thing as
path-accurate touch economics.
"""

from __future__ import annotations

from hedging.errors import UnsupportedInstrument
from hedging.products.leg import InstrumentLeg, InstrumentType, ResolvedLevels

# Fallback premium per unit of hedge ratio for non-digital option legs.
FLAT_PREMIUM_RATE = 0.01
# Discount applied to the heuristic digital premium.
DIGITAL_DISCOUNT = 0.95


def barrier_broken(leg_type: InstrumentType, spot: float, barrier: float) -> bool:
    """Calls are breached from below (spot >= H), puts from above (spot <= H)."""
    if leg_type.is_call:
        return spot >= barrier
    return spot <= barrier


def digital_condition(leg_type: InstrumentType, spot: float, levels: ResolvedLevels) -> bool:
    """
    Static payout condition of a digital leg at `spot`.

    The two barriers of doubleTouch / doubleNoTouch, and the strike and barrier
    of rangeBinary / outsideBinary, may be given in either order; the lower
    one is the lower bound, as in the Monte-Carlo models.
    """
    barrier = levels.barrier
    if leg_type is InstrumentType.ONE_TOUCH:
        return spot >= barrier
    if leg_type is InstrumentType.NO_TOUCH:
        return spot < barrier
    if leg_type in (InstrumentType.DOUBLE_TOUCH, InstrumentType.DOUBLE_NO_TOUCH):
        lower, upper = sorted((barrier, levels.second_barrier))
        if leg_type is InstrumentType.DOUBLE_TOUCH:
            return spot >= upper or spot <= lower
        return lower < spot < upper
    if leg_type in (InstrumentType.RANGE_BINARY, InstrumentType.OUTSIDE_BINARY):
        lower, upper = sorted((levels.strike, barrier))
        if leg_type is InstrumentType.RANGE_BINARY:
            return lower <= spot <= upper
        return spot > upper or spot < lower
    raise UnsupportedInstrument(f"{leg_type.value} is not a digital")


def _option_effect(leg: InstrumentLeg, spot: float, strike: float, hedged: float) -> float:
    q = abs(leg.hedge_ratio)
    if leg.type.is_call and spot > strike:
        return spot - leg.direction * (spot - strike) * q
    if leg.type.is_put and spot < strike:
        return spot - leg.direction * (strike - spot) * q
    return hedged


def apply_leg(leg: InstrumentLeg, levels: ResolvedLevels, spot: float, hedged: float) -> float:
    """
    Hedged rate after `leg` at scenario `spot`, given the rate so far.

    Effects overwrite instead of adding up: an active leg replaces `hedged`,
    an inactive one leaves it untouched. Forwards and swaps always apply.
    """
    leg_type = leg.type
    q = abs(leg.hedge_ratio)
    if leg_type is InstrumentType.FORWARD:
        return levels.strike * q + spot * (1 - q)
    if leg_type is InstrumentType.SWAP:
        return levels.strike
    if leg_type.is_vanilla:
        return _option_effect(leg, spot, levels.strike, hedged)
    if leg_type.is_barrier:
        broken = barrier_broken(leg_type, spot, levels.barrier)
        if broken == leg_type.is_knock_in:
            return _option_effect(leg, spot, levels.strike, hedged)
        return hedged
    if leg_type.is_digital:
        if digital_condition(leg_type, spot, levels):
            return spot * (1 - leg.direction * leg.rebate / 100.0 * q)
        return hedged
    raise UnsupportedInstrument(f"no payoff rule for {leg_type.value}")


def touch_probability(leg_type: InstrumentType, spot: float, barrier: float) -> float:
    """Rough payout probability used by the heuristic digital premium."""
    if leg_type is InstrumentType.ONE_TOUCH:
        return 1.0 if spot >= barrier else min(0.8, spot / barrier * 0.6)
    if leg_type is InstrumentType.NO_TOUCH:
        return max(0.2, 1 - spot / barrier * 0.6) if spot < barrier else 0.0
    return 0.5


def heuristic_premium(leg: InstrumentLeg, levels: ResolvedLevels, spot: float) -> float:
    """
    Cheap premium estimate when no priced premium is available.

    Forwards and swaps cost nothing. Digitals cost p * rebate * 0.95 with p from
    touch_probability(). Other options cost 1% per unit of hedge ratio.
    """
    if leg.type.is_linear:
        return 0.0
    if leg.type.is_digital:
        p = touch_probability(leg.type, spot, levels.barrier)
        return p * leg.rebate / 100.0 * DIGITAL_DISCOUNT
    return FLAT_PREMIUM_RATE * abs(leg.hedge_ratio)
