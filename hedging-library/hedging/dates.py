"""Date helpers: year fractions for time to maturity."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from hedging.errors import InvalidParameter

DAYS_PER_YEAR = 365.25

DateLike = Union[date, datetime, str]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidParameter(f"invalid date {value!r}: expected YYYY-MM-DD") from exc


def year_fraction(maturity: DateLike, valuation: Optional[DateLike] = None) -> float:
    """
    ACT/365.25 year fraction from `valuation` (default: today) to `maturity`.

    A maturity on or before the valuation date raises InvalidParameter, since
    every model needs t > 0.
    """
    end = _to_date(maturity)
    start = _to_date(valuation) if valuation is not None else date.today()
    days = (end - start).days
    if days <= 0:
        raise InvalidParameter(f"maturity {end.isoformat()} is not after {start.isoformat()}")
    return days / DAYS_PER_YEAR
