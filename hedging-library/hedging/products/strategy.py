"""Hedge strategy: an ordered list of instrument legs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from hedging.products.leg import InstrumentLeg


@dataclass
class Strategy:
    """
    Ordered collection of legs forming one hedge (collars, strips, ...).

    Order matters for curve generation: leg effects overwrite each other rather
    than add up. Duplicate leg types are legal.
    """

    legs: list[InstrumentLeg] = field(default_factory=list)
    name: str = ""

    def __iter__(self) -> Iterator[InstrumentLeg]:
        return iter(self.legs)

    def __len__(self) -> int:
        return len(self.legs)

    def __getitem__(self, index: int) -> InstrumentLeg:
        return self.legs[index]

    def with_leg(self, leg: InstrumentLeg) -> "Strategy":
        """Return a new Strategy with `leg` appended."""
        return Strategy(legs=[*self.legs, leg], name=self.name)
