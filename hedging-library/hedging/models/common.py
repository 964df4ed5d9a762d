"""Helpers shared by the closed-form and Monte-Carlo models."""

from __future__ import annotations

import math
from collections.abc import Iterable

from scipy.stats import norm

from hedging.errors import InvalidParameter, UnsupportedInstrument
from hedging.products.leg import InstrumentType


def ncdf(x: float) -> float:
    """Standard normal cumulative distribution N(x)."""
    return float(norm.cdf(x))


def coerce_type(
    option_type: "InstrumentType | str",
    allowed: Iterable[InstrumentType],
    model: str,
) -> InstrumentType:
    """Map a type name or member onto InstrumentType and check the model covers it."""
    try:
        kind = InstrumentType(option_type)
    except ValueError:
        raise UnsupportedInstrument(f"{model}: unknown option type {option_type!r}") from None
    allowed = tuple(allowed)
    if kind not in allowed:
        names = ", ".join(a.value for a in allowed)
        raise UnsupportedInstrument(f"{model} prices {names}; got {kind.value}")
    return kind


def require_positive(**values: float) -> None:
    """Raise InvalidParameter unless every keyword value is finite and > 0."""
    for name, value in values.items():
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidParameter(f"{name} must be > 0, got {value}")


def require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value is None or not math.isfinite(value) or value < 0:
            raise InvalidParameter(f"{name} must be >= 0, got {value}")
