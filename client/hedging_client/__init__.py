"""Python client for the Hedging GraphQL API."""

from hedging_client.client import HedgingClient
from hedging_client.types import (
    ABSOLUTE,
    PERCENT_OF_SPOT,
    ForwardComponents,
    InstrumentLegInput,
    LegPricingResult,
    LevelInput,
    MarketModelInput,
    PayoffCurvePoint,
    StrategyInput,
    StrategyPricingResult,
)

__all__ = [
    "ABSOLUTE",
    "PERCENT_OF_SPOT",
    "ForwardComponents",
    "HedgingClient",
    "InstrumentLegInput",
    "LegPricingResult",
    "LevelInput",
    "MarketModelInput",
    "PayoffCurvePoint",
    "StrategyInput",
    "StrategyPricingResult",
]
