"""
Protocol-based interfaces for the extension points of the hedging library.

Structural subtyping keeps the seams open: the payoff curve generator accepts
anything shaped like a PricingLibrary (the default engine, a remote client,
a stub in tests) without inheriting from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hedging.market import MarketModel
    from hedging.products import InstrumentLeg, Strategy


class Pricer(Protocol):
    """Values one family of legs. Registered with the PricingEngine for dispatch."""

    def can_price(self, leg: InstrumentLeg) -> bool:
        """Return True if this pricer handles the leg's instrument type."""
        ...

    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        """Premium per unit of notional (>= 0; direction comes from quantity)."""
        ...


@runtime_checkable
class PricingLibrary(Protocol):
    """Anything that can price legs and strategies against a market snapshot."""

    def price_leg(self, leg: InstrumentLeg, market: MarketModel) -> float:
        ...

    def price_strategy(self, strategy: Strategy, market: MarketModel) -> list[float]:
        ...
