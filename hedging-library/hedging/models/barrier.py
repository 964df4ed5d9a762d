"""
Knock-in / knock-out options.

barrier_closed_form implements the Reiner-Rubinstein single-barrier formulas
with cost of carry b = r_d - r_f and no rebate. Barrier direction is taken from
the barrier's position relative to spot: below spot is a down barrier, above
is an up barrier, equal means already touched.

Only the knock-in value is computed from the A-D terms; the knock-out is
vanilla - knock-in, so in/out parity holds by construction.

Double barriers have no closed form here and are simulated by
barrier_monte_carlo.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from hedging.errors import InvalidParameter, NumericalInstability, UnsupportedInstrument
from hedging.models.common import coerce_type, ncdf, require_positive
from hedging.models.simulation import (
    DEFAULT_MAX_STEP_VARIANCE,
    DEFAULT_MIN_STEPS,
    check_sims,
    discounted_mean,
    simulate_paths,
)
from hedging.models.vanilla import garman_kohlhagen
from hedging.products.leg import InstrumentType

BARRIER_TYPES = (
    InstrumentType.KNOCKOUT_CALL,
    InstrumentType.KNOCKOUT_PUT,
    InstrumentType.KNOCKIN_CALL,
    InstrumentType.KNOCKIN_PUT,
)


def barrier_closed_form(
    option_type: InstrumentType | str,
    spot: float,
    strike: float,
    domestic_rate: float,
    t: float,
    sigma: float,
    barrier: float,
    foreign_rate: float = 0.0,
    second_barrier: Optional[float] = None,
) -> float:
    """Single-barrier premium per unit of notional."""
    kind = coerce_type(option_type, BARRIER_TYPES, "barrier_closed_form")
    if second_barrier is not None:
        raise UnsupportedInstrument(
            f"{kind.value}: double barriers have no closed form, use barrier_monte_carlo"
        )
    require_positive(spot=spot, strike=strike, barrier=barrier)
    if not sigma > 0 or not t > 0:
        raise InvalidParameter(f"volatility and time must be > 0 (sigma={sigma}, t={t})")

    option = InstrumentType.CALL if kind.is_call else InstrumentType.PUT
    vanilla = garman_kohlhagen(option, spot, strike, domestic_rate, foreign_rate, t, sigma)
    if barrier == spot:
        return vanilla if kind.is_knock_in else 0.0

    unstable = f"{kind.value}: barrier terms not finite (S={spot}, K={strike}, H={barrier}, sigma={sigma})"
    try:
        knock_in = _knock_in(
            is_call=kind.is_call,
            spot=spot,
            strike=strike,
            barrier=barrier,
            rate=domestic_rate,
            carry=domestic_rate - foreign_rate,
            t=t,
            sigma=sigma,
        )
    except (OverflowError, ZeroDivisionError) as exc:
        # (H/S)^(2(mu+1)) blows up when sigma is small relative to the carry.
        raise NumericalInstability(unstable) from exc
    if not math.isfinite(knock_in):
        raise NumericalInstability(unstable)
    knock_in = min(max(knock_in, 0.0), vanilla)
    if kind.is_knock_in:
        return knock_in
    return max(vanilla - knock_in, 0.0)


def _knock_in(
    is_call: bool,
    spot: float,
    strike: float,
    barrier: float,
    rate: float,
    carry: float,
    t: float,
    sigma: float,
) -> float:
    phi = 1.0 if is_call else -1.0
    down = barrier < spot
    eta = 1.0 if down else -1.0

    vol_sqrt_t = sigma * math.sqrt(t)
    mu = (carry - 0.5 * sigma * sigma) / (sigma * sigma)
    shift = (1.0 + mu) * vol_sqrt_t
    carry_df = math.exp((carry - rate) * t)
    df = math.exp(-rate * t)
    ratio = barrier / spot

    x1 = math.log(spot / strike) / vol_sqrt_t + shift
    x2 = math.log(spot / barrier) / vol_sqrt_t + shift
    y1 = math.log(barrier * barrier / (spot * strike)) / vol_sqrt_t + shift
    y2 = math.log(barrier / spot) / vol_sqrt_t + shift

    def vanilla_term(x: float) -> float:
        return phi * spot * carry_df * ncdf(phi * x) - phi * strike * df * ncdf(phi * x - phi * vol_sqrt_t)

    def reflected_term(y: float) -> float:
        return (
            phi * spot * carry_df * ratio ** (2.0 * (mu + 1.0)) * ncdf(eta * y)
            - phi * strike * df * ratio ** (2.0 * mu) * ncdf(eta * y - eta * vol_sqrt_t)
        )

    a = vanilla_term(x1)
    b = vanilla_term(x2)
    c = reflected_term(y1)
    d = reflected_term(y2)

    strike_above = strike > barrier
    if is_call and down:
        return c if strike_above else a - b + d
    if is_call:
        return a if strike_above else b - c + d
    if down:
        return b - c + d if strike_above else a
    return a - b + d if strike_above else c


def barrier_monte_carlo(
    option_type: InstrumentType | str,
    spot: float,
    strike: float,
    rate: float,
    t: float,
    sigma: float,
    barrier: float,
    second_barrier: Optional[float] = None,
    n_sims: int = 1000,
    foreign_rate: float = 0.0,
    seed: Optional[int] = None,
    min_steps: int = DEFAULT_MIN_STEPS,
    max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
    max_std_error: Optional[float] = None,
) -> float:
    """
    Path-simulated barrier premium.

    A single barrier knocks when the path reaches it from spot's side. With a
    second barrier the path knocks on leaving the open band between the two.
    Knock-outs pay nothing on touched paths, knock-ins pay only on touched
    paths; otherwise the payoff is the vanilla one at maturity.
    """
    kind = coerce_type(option_type, BARRIER_TYPES, "barrier_monte_carlo")
    require_positive(spot=spot, strike=strike, barrier=barrier, t=t)
    if second_barrier is not None:
        require_positive(second_barrier=second_barrier)
    if sigma < 0:
        raise InvalidParameter(f"volatility must be >= 0, got {sigma}")
    check_sims(n_sims)

    rng = np.random.default_rng(seed)
    paths = simulate_paths(
        spot, rate - foreign_rate, sigma, t, n_sims, rng, min_steps, max_step_variance
    )
    if second_barrier is None:
        if barrier >= spot:
            touched = paths.path_max >= barrier
        else:
            touched = paths.path_min <= barrier
    else:
        lower, upper = sorted((barrier, second_barrier))
        touched = (paths.path_min <= lower) | (paths.path_max >= upper)

    if kind.is_call:
        vanilla = np.maximum(paths.terminal - strike, 0.0)
    else:
        vanilla = np.maximum(strike - paths.terminal, 0.0)
    if kind.is_knock_in:
        payoffs = np.where(touched, vanilla, 0.0)
    else:
        payoffs = np.where(touched, 0.0, vanilla)
    return discounted_mean(payoffs, math.exp(-rate * t), max_std_error)
