from __future__ import annotations

from datetime import date
from typing import List, Optional

from .core.settings import DEFAULT_SETTINGS, ConversionSettings
from .core.time import as_datetime, count_leap_days, days_in_month, is_leap_year
from .delta import RelativeDelta
from .engines.convert import CONVERTERS, Scalar
from .engines.convert import convert as _convert

__all__ = [
    "between",
    "apply",
    "convert",
    "list_units",
    "leap_days_between",
    "is_leap_year",
    "days_in_month",
]


def between(date1: date, date2: date, *, count_leap_days: bool = False) -> RelativeDelta:
    """date1 - date2 as a RelativeDelta."""
    return RelativeDelta.between(date1, date2, count_leap_days=count_leap_days)

def apply(instant: date, delta: Optional[RelativeDelta] = None, **fields) -> date:
    """Apply `delta`, or a delta built from keyword fields, to `instant`."""
    if delta is None:
        delta = RelativeDelta(**fields)
    elif fields:
        raise TypeError("Pass either a RelativeDelta or keyword fields, not both")
    return delta.apply_to_date(instant)

def convert(
    delta: RelativeDelta,
    unit: str,
    *,
    reference: Optional[date] = None,
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> Scalar:
    return _convert(delta.relative, unit, reference, settings)

def list_units() -> List[str]:
    return list(CONVERTERS)

def leap_days_between(date1: date, date2: date) -> int:
    """February 29ths on or between the two calendar dates, in either order."""
    a, b = as_datetime(date1), as_datetime(date2)
    if a > b:
        a, b = b, a
    return count_leap_days(a, b)
