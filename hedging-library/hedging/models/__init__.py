"""Stateless valuation functions, one module per instrument family."""

from hedging.models.barrier import BARRIER_TYPES, barrier_closed_form, barrier_monte_carlo
from hedging.models.commodity import (
    BLACK76_TYPES,
    ForwardComponents,
    black76,
    commodity_forward,
    cost_of_carry,
    forward_components,
)
from hedging.models.digital import DIGITAL_TYPES, digital_monte_carlo
from hedging.models.forward import forward_rate, swap_price
from hedging.models.implied_vol import implied_volatility
from hedging.models.vanilla import (
    VANILLA_TYPES,
    garman_kohlhagen,
    vanilla_closed_form,
    vanilla_monte_carlo,
)

__all__ = [
    "BARRIER_TYPES",
    "BLACK76_TYPES",
    "DIGITAL_TYPES",
    "VANILLA_TYPES",
    "barrier_closed_form",
    "barrier_monte_carlo",
    "black76",
    "commodity_forward",
    "cost_of_carry",
    "digital_monte_carlo",
    "ForwardComponents",
    "forward_components",
    "forward_rate",
    "garman_kohlhagen",
    "implied_volatility",
    "swap_price",
    "vanilla_closed_form",
    "vanilla_monte_carlo",
]
