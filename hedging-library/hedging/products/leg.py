"""Hedge instrument leg (instrument data only; pricing via PricingEngine)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hedging.errors import InvalidParameter
from hedging.products.levels import BarrierSpec, StrikeSpec


class InstrumentType(str, Enum):
    """Closed set of hedge instruments a strategy can combine."""

    FORWARD = "forward"
    SWAP = "swap"
    CALL = "call"
    PUT = "put"
    KNOCKOUT_CALL = "knockoutCall"
    KNOCKOUT_PUT = "knockoutPut"
    KNOCKIN_CALL = "knockinCall"
    KNOCKIN_PUT = "knockinPut"
    ONE_TOUCH = "oneTouch"
    NO_TOUCH = "noTouch"
    DOUBLE_TOUCH = "doubleTouch"
    DOUBLE_NO_TOUCH = "doubleNoTouch"
    RANGE_BINARY = "rangeBinary"
    OUTSIDE_BINARY = "outsideBinary"

    @property
    def is_linear(self) -> bool:
        return self in _LINEAR

    @property
    def is_vanilla(self) -> bool:
        return self in _VANILLA

    @property
    def is_barrier(self) -> bool:
        return self in _BARRIER

    @property
    def is_digital(self) -> bool:
        return self in _DIGITAL

    @property
    def is_touch(self) -> bool:
        """Touch / no-touch digitals: priced off barrier(s) only, no strike."""
        return self in _TOUCH

    @property
    def is_knock_in(self) -> bool:
        return self in (InstrumentType.KNOCKIN_CALL, InstrumentType.KNOCKIN_PUT)

    @property
    def is_call(self) -> bool:
        return self in (
            InstrumentType.CALL,
            InstrumentType.KNOCKOUT_CALL,
            InstrumentType.KNOCKIN_CALL,
        )

    @property
    def is_put(self) -> bool:
        return self in (
            InstrumentType.PUT,
            InstrumentType.KNOCKOUT_PUT,
            InstrumentType.KNOCKIN_PUT,
        )

    @property
    def requires_strike(self) -> bool:
        return not self.is_touch

    @property
    def requires_barrier(self) -> bool:
        return self.is_barrier or self.is_digital

    @property
    def requires_second_barrier(self) -> bool:
        return self in (InstrumentType.DOUBLE_TOUCH, InstrumentType.DOUBLE_NO_TOUCH)


_LINEAR = frozenset({InstrumentType.FORWARD, InstrumentType.SWAP})
_VANILLA = frozenset({InstrumentType.CALL, InstrumentType.PUT})
_BARRIER = frozenset(
    {
        InstrumentType.KNOCKOUT_CALL,
        InstrumentType.KNOCKOUT_PUT,
        InstrumentType.KNOCKIN_CALL,
        InstrumentType.KNOCKIN_PUT,
    }
)
_TOUCH = frozenset(
    {
        InstrumentType.ONE_TOUCH,
        InstrumentType.NO_TOUCH,
        InstrumentType.DOUBLE_TOUCH,
        InstrumentType.DOUBLE_NO_TOUCH,
    }
)
_DIGITAL = _TOUCH | {InstrumentType.RANGE_BINARY, InstrumentType.OUTSIDE_BINARY}


@dataclass(frozen=True)
class InstrumentLeg:
    """
    One component of a hedge strategy.

    - quantity is signed: > 0 bought (long), < 0 sold (short). Its magnitude is a
      hedge ratio in hundredths, so quantity=100 hedges the full notional.
    - rebate is a percent of notional and only matters for digitals.
    - volatility / time_to_payoff override the market's values when set.
    - rangeBinary / outsideBinary use strike as the lower bound and barrier as
      the upper bound.
    """

    type: InstrumentType
    strike: Optional[StrikeSpec] = None
    barrier: Optional[BarrierSpec] = None
    second_barrier: Optional[BarrierSpec] = None
    rebate: float = 5.0
    volatility: Optional[float] = None
    quantity: float = 100.0
    time_to_payoff: Optional[float] = None

    def __post_init__(self) -> None:
        # Accept the raw enum value ("knockoutCall") as well as the member.
        if not isinstance(self.type, InstrumentType):
            try:
                object.__setattr__(self, "type", InstrumentType(self.type))
            except ValueError:
                raise InvalidParameter(f"unknown instrument type {self.type!r}") from None
        self._validate()

    def _validate(self) -> None:
        name = self.type.value
        if not math.isfinite(self.quantity) or self.quantity == 0:
            raise InvalidParameter(f"{name}: quantity must be a non-zero number")
        if self.type.requires_strike and self.strike is None:
            raise InvalidParameter(f"{name}: strike is required")
        if self.type.requires_barrier and self.barrier is None:
            raise InvalidParameter(f"{name}: barrier is required")
        if self.type.requires_second_barrier and self.second_barrier is None:
            raise InvalidParameter(f"{name}: second_barrier is required")
        if self.rebate < 0:
            raise InvalidParameter(f"{name}: rebate must be >= 0")
        if self.volatility is not None and self.volatility < 0:
            raise InvalidParameter(f"{name}: volatility must be >= 0")
        if self.time_to_payoff is not None and self.time_to_payoff <= 0:
            raise InvalidParameter(f"{name}: time_to_payoff must be > 0")

    @property
    def hedge_ratio(self) -> float:
        """Signed fraction of notional hedged (quantity / 100)."""
        return self.quantity / 100.0

    @property
    def direction(self) -> int:
        return 1 if self.quantity > 0 else -1

    @property
    def is_long(self) -> bool:
        return self.quantity > 0

    @property
    def is_double_barrier(self) -> bool:
        return self.type.is_barrier and self.second_barrier is not None

    def resolve(self, spot: float) -> "ResolvedLevels":
        """Absolute strike / barrier levels for the given spot."""
        return ResolvedLevels(
            strike=self.strike.resolve(spot) if self.strike is not None else None,
            barrier=self.barrier.resolve(spot) if self.barrier is not None else None,
            second_barrier=(
                self.second_barrier.resolve(spot) if self.second_barrier is not None else None
            ),
        )


@dataclass(frozen=True)
class ResolvedLevels:
    """A leg's strike and barriers as absolute rates (None where not set)."""

    strike: Optional[float]
    barrier: Optional[float]
    second_barrier: Optional[float]
