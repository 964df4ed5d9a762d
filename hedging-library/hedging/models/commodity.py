"""
Cost-of-carry forwards and Black-76 options on commodities.

The cost of carry b = r + storage_cost - convenience_yield drives both the
forward F = S * e^{b t} and the Black-76 premium. An FX pair is the special
case b = r_d - r_f, which is how garman_kohlhagen prices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from hedging.errors import InvalidParameter, NumericalInstability
from hedging.models.common import coerce_type, ncdf, require_positive
from hedging.products.leg import InstrumentType

BLACK76_TYPES = (InstrumentType.CALL, InstrumentType.PUT)


def cost_of_carry(rate: float, storage_cost: float = 0.0, convenience_yield: float = 0.0) -> float:
    """b = r + storage_cost - convenience_yield (all continuously compounded, annual)."""
    return rate + storage_cost - convenience_yield


def commodity_forward(spot: float, carry: float, t: float) -> float:
    """F = S * exp(b * t)."""
    require_positive(spot=spot)
    if t < 0:
        raise InvalidParameter("t must be >= 0")
    return spot * math.exp(carry * t)


@dataclass(frozen=True)
class ForwardComponents:
    """Breakdown of a commodity forward. basis > 0 is contango, < 0 backwardation."""

    spot: float
    forward: float
    cost_of_carry: float
    time_to_maturity: float
    storage_cost: float
    convenience_yield: float

    @property
    def basis(self) -> float:
        return self.forward - self.spot

    @property
    def is_contango(self) -> bool:
        return self.forward > self.spot


def forward_components(
    spot: float,
    rate: float,
    storage_cost: float,
    convenience_yield: float,
    t: float,
) -> ForwardComponents:
    carry = cost_of_carry(rate, storage_cost, convenience_yield)
    return ForwardComponents(
        spot=spot,
        forward=commodity_forward(spot, carry, t),
        cost_of_carry=carry,
        time_to_maturity=t,
        storage_cost=storage_cost,
        convenience_yield=convenience_yield,
    )


def black76(
    option_type: InstrumentType | str,
    spot: float,
    strike: float,
    rate: float,
    carry: float,
    t: float,
    sigma: float,
) -> float:
    """
    Black-76 premium on the forward F = S e^{b t}, per unit of notional.

    d1 = (ln(F/K) + sigma^2 t / 2) / (sigma sqrt(t)), d2 = d1 - sigma sqrt(t)
    call = e^{-r t} (F N(d1) - K N(d2))
    put  = e^{-r t} (K N(-d2) - F N(-d1))
    """
    kind = coerce_type(option_type, BLACK76_TYPES, "black76")
    require_positive(spot=spot, strike=strike)
    if not sigma > 0:
        raise InvalidParameter(f"volatility must be > 0, got {sigma}")
    if not t > 0:
        raise InvalidParameter(f"time to maturity must be > 0, got {t}")

    vol_sqrt_t = sigma * math.sqrt(t)
    if vol_sqrt_t == 0.0 or not math.isfinite(vol_sqrt_t):
        raise NumericalInstability(f"sigma*sqrt(t) = {vol_sqrt_t} (sigma={sigma}, t={t})")
    # ln(F/K) without forming F, which can overflow for large b * t.
    d1 = (math.log(spot / strike) + carry * t + 0.5 * sigma * sigma * t) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    if not (math.isfinite(d1) and math.isfinite(d2)):
        raise NumericalInstability(f"d1={d1}, d2={d2} are not finite")

    # e^{-r t} F = S e^{(b - r) t}
    forward_leg = spot * math.exp((carry - rate) * t)
    strike_leg = strike * math.exp(-rate * t)
    if kind is InstrumentType.CALL:
        price = forward_leg * ncdf(d1) - strike_leg * ncdf(d2)
    else:
        price = strike_leg * ncdf(-d2) - forward_leg * ncdf(-d1)
    return max(price, 0.0)
