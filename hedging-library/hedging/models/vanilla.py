"""
European calls and puts on FX / commodity spot.

- garman_kohlhagen: closed form (Black-Scholes with domestic and foreign rates)
- vanilla_monte_carlo: terminal-spot simulation, used to cross-check the closed form
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from hedging.errors import InvalidParameter
from hedging.models.commodity import black76
from hedging.models.common import coerce_type, require_positive
from hedging.models.simulation import check_sims, discounted_mean, simulate_terminal
from hedging.products.leg import InstrumentType

VANILLA_TYPES = (InstrumentType.CALL, InstrumentType.PUT)


def garman_kohlhagen(
    option_type: InstrumentType | str,
    spot: float,
    strike: float,
    domestic_rate: float,
    foreign_rate: float,
    t: float,
    sigma: float,
) -> float:
    """
    Garman-Kohlhagen premium per unit of notional: Black-76 with b = r_d - r_f.

    d1 = (ln(S/K) + (r_d - r_f + sigma^2/2) t) / (sigma sqrt(t)), d2 = d1 - sigma sqrt(t)
    call = S e^{-r_f t} N(d1) - K e^{-r_d t} N(d2)
    put  = K e^{-r_d t} N(-d2) - S e^{-r_f t} N(-d1)
    """
    kind = coerce_type(option_type, VANILLA_TYPES, "garman_kohlhagen")
    return black76(kind, spot, strike, domestic_rate, domestic_rate - foreign_rate, t, sigma)


vanilla_closed_form = garman_kohlhagen


def vanilla_monte_carlo(
    option_type: InstrumentType | str,
    spot: float,
    strike: float,
    domestic_rate: float,
    foreign_rate: float,
    t: float,
    sigma: float,
    n_sims: int = 1000,
    seed: Optional[int] = None,
    max_std_error: Optional[float] = None,
) -> float:
    """Average discounted payoff over `n_sims` simulated terminal spots."""
    kind = coerce_type(option_type, VANILLA_TYPES, "vanilla_monte_carlo")
    require_positive(spot=spot, strike=strike, t=t)
    if sigma < 0:
        raise InvalidParameter(f"volatility must be >= 0, got {sigma}")
    check_sims(n_sims)

    rng = np.random.default_rng(seed)
    terminal = simulate_terminal(spot, domestic_rate - foreign_rate, sigma, t, n_sims, rng)
    if kind is InstrumentType.CALL:
        payoffs = np.maximum(terminal - strike, 0.0)
    else:
        payoffs = np.maximum(strike - terminal, 0.0)
    return discounted_mean(payoffs, math.exp(-domestic_rate * t), max_std_error)
