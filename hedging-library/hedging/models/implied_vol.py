"""Implied volatility: invert Garman-Kohlhagen for a quoted premium."""

from __future__ import annotations

from scipy.optimize import brentq

from hedging.errors import InvalidParameter
from hedging.models.common import coerce_type, require_non_negative
from hedging.models.vanilla import VANILLA_TYPES, garman_kohlhagen
from hedging.products.leg import InstrumentType

VOL_LOWER = 1e-4
VOL_UPPER = 5.0


def implied_volatility(
    option_type: InstrumentType | str,
    price: float,
    spot: float,
    strike: float,
    domestic_rate: float,
    foreign_rate: float,
    t: float,
    tol: float = 1e-10,
) -> float:
    """
    Volatility sigma in [1e-4, 5] with garman_kohlhagen(sigma) == price.

    Raises InvalidParameter when the premium cannot be reached in that range
    (below intrinsic value or above the no-arbitrage upper bound).
    """
    kind = coerce_type(option_type, VANILLA_TYPES, "implied_volatility")
    require_non_negative(price=price)

    def objective(sigma: float) -> float:
        return garman_kohlhagen(kind, spot, strike, domestic_rate, foreign_rate, t, sigma) - price

    low, high = objective(VOL_LOWER), objective(VOL_UPPER)
    if low > 0 or high < 0:
        raise InvalidParameter(
            f"premium {price} outside the range reachable with volatility in "
            f"[{VOL_LOWER}, {VOL_UPPER}] ({price + low:.6g} .. {price + high:.6g})"
        )
    if low == 0:
        return VOL_LOWER
    if high == 0:
        return VOL_UPPER
    return float(brentq(objective, VOL_LOWER, VOL_UPPER, xtol=tol))
