"""
reldelta.engines.apply
----------------------
Applies a (RelativeOffset, AbsoluteOverride) pair to a date or datetime.

Order is fixed and not commutative:
  1. absolute year, then absolute month/day (day clamped to the month length)
  2. absolute hour/minute/second/millisecond
  3. relative years, then relative months (day clamped)
  4. relative days (+ leap_days in a leap year past February), then time units
  5. nth-weekday search
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TypeVar

from loguru import logger

from ..core.time import add_months, as_datetime, days_in_month, is_leap_year, with_year
from ..core.types import AbsoluteOverride, RelativeOffset
from ..weekday import Weekday

D = TypeVar("D", date, datetime)


def _needs_datetime(rel: RelativeOffset, absolute: AbsoluteOverride) -> bool:
    return rel.has_time or absolute.has_time or rel.days != int(rel.days)


def _set_absolute(d, absolute: AbsoluteOverride):
    if absolute.year is not None:
        d = with_year(d, absolute.year)

    if absolute.month is not None or absolute.day is not None:
        month = absolute.month if absolute.month is not None else d.month
        wanted = absolute.day if absolute.day is not None else d.day
        last = days_in_month(d.year, month)
        if wanted > last:
            logger.debug("Clamped day to month end", year=d.year, month=month, day=wanted, last=last)
        d = d.replace(month=month, day=min(wanted, last))

    if isinstance(d, datetime):
        time_fields = {}
        if absolute.hour is not None:
            time_fields["hour"] = absolute.hour
        if absolute.minute is not None:
            time_fields["minute"] = absolute.minute
        if absolute.second is not None:
            time_fields["second"] = absolute.second
        if absolute.millisecond is not None:
            time_fields["microsecond"] = absolute.millisecond * 1000
        if time_fields:
            d = d.replace(**time_fields)
    return d


def _add_relative(d, rel: RelativeOffset):
    if rel.years:
        d = with_year(d, d.year + rel.years)
    if rel.months:
        d = add_months(d, rel.months)

    days_to_add = rel.days
    if rel.leap_days and is_leap_year(d.year) and d.month > 2:
        days_to_add += rel.leap_days

    step = timedelta(
        days=days_to_add,
        hours=rel.hours,
        minutes=rel.minutes,
        seconds=rel.seconds,
        milliseconds=rel.milliseconds,
    )
    return d + step if step else d


def weekday_jump(current: int, target: Weekday) -> int:
    """
    Signed day count from a day whose weekday is `current` to the |n|-th
    occurrence of `target`, the current day counting as the first one.
    """
    nth = target.n or 1
    jump = (abs(nth) - 1) * 7
    if nth > 0:
        return jump + (7 - current + target.weekday) % 7
    return -(jump + (current - target.weekday) % 7)


def apply_delta(instant: D, rel: RelativeOffset, absolute: AbsoluteOverride) -> D:
    result = instant
    if not isinstance(result, datetime) and _needs_datetime(rel, absolute):
        result = as_datetime(result)

    result = _set_absolute(result, absolute)
    result = _add_relative(result, rel)

    if absolute.weekday is not None:
        jump = weekday_jump(result.weekday(), absolute.weekday)
        if jump:
            result = result + timedelta(days=jump)
    return result
