"""
Pricing entrypoint.

Most users of the library only need `price_leg(leg, market)` and
`price_strategy(strategy, market)`. They delegate to a default `PricingEngine`
built from the HEDGING_* environment settings.

Keeping this as a thin wrapper gives a stable, ergonomic API while still
allowing callers to instantiate/configure their own engines.
"""

from __future__ import annotations

from hedging.engine import PricingEngine, create_default_engine
from hedging.market import MarketModel
from hedging.products import InstrumentLeg, Strategy
from hedging.settings import PricingSettings

_default_engine = create_default_engine(PricingSettings.from_env())


def default_engine() -> PricingEngine:
    """The shared engine behind the module-level functions."""
    return _default_engine


def price_leg(leg: InstrumentLeg, market: MarketModel) -> float:
    """Premium per unit of notional for one leg (via the default engine)."""
    return _default_engine.price_leg(leg, market)


def price_strategy(strategy: Strategy, market: MarketModel) -> list[float]:
    """Per-leg premiums of a strategy, in leg order."""
    return _default_engine.price_strategy(strategy, market)


def forward_rate_for(leg: InstrumentLeg, market: MarketModel) -> float:
    """Fixed rate locked in by a forward or swap leg."""
    return _default_engine.forward_rate(leg, market)
