"""Hedging library: market model, hedge legs, pricing engine, and payoff curves."""

from hedging.dates import year_fraction
from hedging.engine import PricingEngine, create_default_engine
from hedging.errors import (
    InvalidParameter,
    NumericalInstability,
    PricingError,
    SimulationNonConvergence,
    UnsupportedInstrument,
)
from hedging.interfaces import Pricer, PricingLibrary
from hedging.market import MarketModel
from hedging.models import (
    barrier_closed_form,
    barrier_monte_carlo,
    black76,
    commodity_forward,
    cost_of_carry,
    digital_monte_carlo,
    forward_components,
    forward_rate,
    garman_kohlhagen,
    implied_volatility,
    swap_price,
    vanilla_closed_form,
    vanilla_monte_carlo,
)
from hedging.payoff import (
    LevelAnchor,
    PayoffCurveGenerator,
    PayoffCurvePoint,
    effective_rate,
    generate_curve,
)
from hedging.pricers import BasePricer
from hedging.pricing import forward_rate_for, price_leg, price_strategy
from hedging.products import (
    BarrierSpec,
    InstrumentLeg,
    InstrumentType,
    Level,
    LevelKind,
    Strategy,
    StrikeSpec,
)
from hedging.settings import PricingSettings

__version__ = "0.1.0"

__all__ = [
    "Pricer",
    "PricingLibrary",
    "MarketModel",
    "PricingSettings",
    "PricingEngine",
    "create_default_engine",
    "BasePricer",
    "price_leg",
    "price_strategy",
    "forward_rate_for",
    "InstrumentLeg",
    "InstrumentType",
    "Level",
    "LevelKind",
    "StrikeSpec",
    "BarrierSpec",
    "Strategy",
    "forward_rate",
    "swap_price",
    "garman_kohlhagen",
    "vanilla_closed_form",
    "vanilla_monte_carlo",
    "barrier_closed_form",
    "barrier_monte_carlo",
    "digital_monte_carlo",
    "black76",
    "cost_of_carry",
    "commodity_forward",
    "forward_components",
    "implied_volatility",
    "year_fraction",
    "LevelAnchor",
    "PayoffCurveGenerator",
    "PayoffCurvePoint",
    "generate_curve",
    "effective_rate",
    "PricingError",
    "InvalidParameter",
    "UnsupportedInstrument",
    "NumericalInstability",
    "SimulationNonConvergence",
    "__version__",
]
