"""
Linear instruments: FX / commodity forwards and fixed-for-floating swaps.

Forwards and swaps carry no upfront premium; what the engine needs from them is
the fixed rate they lock in, given by covered interest parity (CIP).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from hedging.errors import InvalidParameter
from hedging.models.common import require_positive


def forward_rate(spot: float, domestic_rate: float, foreign_rate: float, t: float) -> float:
    """
    CIP forward: F = S * exp((r_d - r_f) * t).

    With t -> 0 the forward collapses to spot. Negative t is rejected.
    """
    require_positive(spot=spot)
    if t < 0:
        raise InvalidParameter("t must be >= 0")
    return spot * math.exp((domestic_rate - foreign_rate) * t)


def swap_price(forwards: Sequence[float], times: Sequence[float], rate: float) -> float:
    """
    Value of a strip of forward fixings: sum_i F_i * exp(-r * t_i).

    forwards[i] settles at times[i] (year fractions), discounted at a flat rate.
    """
    if len(forwards) != len(times):
        raise InvalidParameter("forwards and times must have the same length")
    if not forwards:
        raise InvalidParameter("swap needs at least one fixing")
    total = 0.0
    for fwd, t in zip(forwards, times):
        if t < 0:
            raise InvalidParameter("fixing times must be >= 0")
        total += fwd * math.exp(-rate * t)
    return total
