"""
Digital / touch options, all by simulation.

Each pays a fixed `rebate` (fraction of notional) when its condition holds:

- oneTouch / noTouch: the path touches / never touches `barrier`; direction
  (up or down) is taken from the barrier's position relative to spot
- doubleTouch / doubleNoTouch: the path touches / never touches either of
  `barrier` and `second_barrier`
- rangeBinary / outsideBinary: the terminal spot lies inside / outside
  [min(K, barrier), max(K, barrier)]

Premium = e^{-r t} * rebate * P(condition).
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from hedging.errors import InvalidParameter
from hedging.models.common import coerce_type, require_non_negative, require_positive
from hedging.models.simulation import (
    DEFAULT_MAX_STEP_VARIANCE,
    DEFAULT_MIN_STEPS,
    check_sims,
    discounted_mean,
    simulate_paths,
    simulate_terminal,
)
from hedging.products.leg import InstrumentType

DIGITAL_TYPES = (
    InstrumentType.ONE_TOUCH,
    InstrumentType.NO_TOUCH,
    InstrumentType.DOUBLE_TOUCH,
    InstrumentType.DOUBLE_NO_TOUCH,
    InstrumentType.RANGE_BINARY,
    InstrumentType.OUTSIDE_BINARY,
)


def digital_monte_carlo(
    option_type: InstrumentType | str,
    spot: float,
    strike: Optional[float],
    rate: float,
    t: float,
    sigma: float,
    barrier: Optional[float] = None,
    second_barrier: Optional[float] = None,
    n_sims: int = 10000,
    rebate: float = 1.0,
    foreign_rate: float = 0.0,
    seed: Optional[int] = None,
    min_steps: int = DEFAULT_MIN_STEPS,
    max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
    max_std_error: Optional[float] = None,
) -> float:
    kind = coerce_type(option_type, DIGITAL_TYPES, "digital_monte_carlo")
    require_positive(spot=spot, t=t, barrier=barrier)
    require_non_negative(rebate=rebate)
    if sigma < 0:
        raise InvalidParameter(f"volatility must be >= 0, got {sigma}")
    check_sims(n_sims)

    rng = np.random.default_rng(seed)
    drift = rate - foreign_rate

    if kind in (InstrumentType.RANGE_BINARY, InstrumentType.OUTSIDE_BINARY):
        require_positive(strike=strike)
        lower, upper = sorted((strike, barrier))
        terminal = simulate_terminal(spot, drift, sigma, t, n_sims, rng)
        inside = (terminal >= lower) & (terminal <= upper)
        condition = inside if kind is InstrumentType.RANGE_BINARY else ~inside
    else:
        paths = simulate_paths(
            spot, drift, sigma, t, n_sims, rng, min_steps, max_step_variance
        )
        if kind in (InstrumentType.DOUBLE_TOUCH, InstrumentType.DOUBLE_NO_TOUCH):
            require_positive(second_barrier=second_barrier)
            lower, upper = sorted((barrier, second_barrier))
            touched = (paths.path_min <= lower) | (paths.path_max >= upper)
        elif barrier >= spot:
            touched = paths.path_max >= barrier
        else:
            touched = paths.path_min <= barrier
        if kind in (InstrumentType.ONE_TOUCH, InstrumentType.DOUBLE_TOUCH):
            condition = touched
        else:
            condition = ~touched

    payoffs = np.where(condition, rebate, 0.0)
    return discounted_mean(payoffs, math.exp(-rate * t), max_std_error)
