"""Base pricer abstract class for hedge leg pricing implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hedging.market import MarketModel
from hedging.products.leg import InstrumentLeg


class BasePricer(ABC):
    """Abstract base class for leg pricers.

    Subclasses implement can_price() and premium() for one instrument family.
    The market a pricer receives already carries the leg's volatility and
    time-to-payoff overrides.
    """

    @abstractmethod
    def can_price(self, leg: InstrumentLeg) -> bool:
        """Return True if this pricer handles the leg type."""
        ...

    @abstractmethod
    def premium(self, leg: InstrumentLeg, market: MarketModel) -> float:
        """Premium per unit of notional."""
        ...

    def describe(self) -> str:
        """Short model label used in log lines."""
        return type(self).__name__
