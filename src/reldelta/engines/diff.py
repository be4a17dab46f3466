"""
reldelta.engines.diff
---------------------
Relative offset between two instants, expressed as "date1 minus date2":
applying the result to date2 lands on date1 unless a month-end clamp was
needed on the way.
"""

from __future__ import annotations

from datetime import date, datetime

from loguru import logger

from ..core.time import add_months, as_datetime, count_leap_days, day_count
from ..core.types import RelativeOffset
from .normalize import fix


def _time_fields(d: date):
    if isinstance(d, datetime):
        return d.hour, d.minute, d.second, d.microsecond // 1000
    return 0, 0, 0, 0


def _signed(value: int, sign: int) -> int:
    return 0 if value == 0 else value * sign


def between(date1: date, date2: date, *, count_leap_days_spanned: bool = False) -> RelativeOffset:
    if isinstance(date1, datetime) != isinstance(date2, datetime):
        date1, date2 = as_datetime(date1), as_datetime(date2)
    if date1 <= date2:
        earlier, later, sign = date1, date2, -1
    else:
        earlier, later, sign = date2, date1, 1

    years = later.year - earlier.year
    months = later.month - earlier.month
    if later.day < earlier.day:
        months -= 1
    if months < 0:
        years -= 1
        months += 12

    # whole days left after stepping earlier forward by years+months
    stepped = add_months(date(earlier.year, earlier.month, earlier.day), years * 12 + months)
    days = day_count(stepped, later)

    # time of day is not borrowed against days
    lh, lmin, ls, lms = _time_fields(later)
    eh, emin, es, ems = _time_fields(earlier)
    hours, minutes, seconds, milliseconds = lh - eh, lmin - emin, ls - es, lms - ems

    leap_days = count_leap_days(earlier, later) if count_leap_days_spanned else 0

    logger.debug(
        "Diffed instants",
        earlier=str(earlier),
        later=str(later),
        years=years,
        months=months,
        days=days,
        leap_days=leap_days,
    )
    return fix(RelativeOffset(
        years=_signed(years, sign),
        months=_signed(months, sign),
        days=_signed(days, sign),
        hours=_signed(hours, sign),
        minutes=_signed(minutes, sign),
        seconds=_signed(seconds, sign),
        milliseconds=_signed(milliseconds, sign),
        leap_days=_signed(leap_days, sign),
    ))
