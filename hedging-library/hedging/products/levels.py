"""Strike and barrier level specifications (absolute or percent of spot)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from hedging.errors import InvalidParameter


class LevelKind(str, Enum):
    """How a level's `value` is interpreted."""

    ABSOLUTE = "absolute"
    PERCENT_OF_SPOT = "percent"


@dataclass(frozen=True)
class Level:
    """
    A rate level quoted either as an absolute rate or as a percentage of spot.

    resolve(spot) turns it into an absolute rate:
    ABSOLUTE -> value, PERCENT_OF_SPOT -> spot * value / 100.
    """

    value: float
    kind: LevelKind = LevelKind.ABSOLUTE

    def __post_init__(self) -> None:
        # Accept the raw enum value ("percent") as well as the member.
        if not isinstance(self.kind, LevelKind):
            try:
                object.__setattr__(self, "kind", LevelKind(self.kind))
            except ValueError:
                raise InvalidParameter(
                    f"unknown level kind {self.kind!r}; expected one of "
                    f"{[k.value for k in LevelKind]}"
                ) from None

    def resolve(self, spot: float) -> float:
        """Absolute level for the given spot. Raises InvalidParameter if not > 0."""
        if self.kind is LevelKind.PERCENT_OF_SPOT:
            resolved = spot * self.value / 100.0
        else:
            resolved = self.value
        if not math.isfinite(resolved) or resolved <= 0:
            raise InvalidParameter(
                f"{type(self).__name__} resolves to {resolved} "
                f"(value={self.value}, kind={self.kind.value}, spot={spot}); must be > 0"
            )
        return resolved

    @classmethod
    def absolute(cls, value: float):
        return cls(value=value, kind=LevelKind.ABSOLUTE)

    @classmethod
    def percent(cls, value: float):
        return cls(value=value, kind=LevelKind.PERCENT_OF_SPOT)


@dataclass(frozen=True)
class StrikeSpec(Level):
    """Strike level of a leg."""


@dataclass(frozen=True)
class BarrierSpec(Level):
    """Barrier (or digital bound) level of a leg."""
