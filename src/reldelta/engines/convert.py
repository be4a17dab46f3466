"""
reldelta.engines.convert
------------------------
Duration equivalents of a relative offset.

Years and months have no fixed length, so whenever either is non-zero the
offset is measured from a reference instant: the calendar days between the
reference and the reference advanced by years+months stand in for them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Dict, Optional, Union

from loguru import logger

from ..core.settings import DEFAULT_SETTINGS, ConversionSettings
from ..core.time import add_months, as_datetime, day_count, with_year
from ..core.types import RelativeOffset

Scalar = Union[int, float]

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_WEEK = 604800


def clean_float(x: Scalar, settings: ConversionSettings = DEFAULT_SETTINGS) -> Scalar:
    """
    Snap binary floating-point noise: within integer_epsilon of an integer gives
    that int, anything else is rounded to round_digits decimals.
    """
    if isinstance(x, int):
        return x
    nearest = round(x)
    if abs(nearest - x) < settings.integer_epsilon:
        return int(nearest)
    return round(x, settings.round_digits)


def calendar_days(
    rel: RelativeOffset,
    reference: Optional[date] = None,
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> int:
    """Calendar days covered by rel.years and rel.months counted from reference."""
    if rel.years == 0 and rel.months == 0:
        return 0
    if reference is None:
        reference = datetime.now()
    start = as_datetime(reference).replace(hour=settings.reference_hour, minute=0, second=0, microsecond=0)
    end = start
    if rel.years:
        end = with_year(end, end.year + rel.years)
    if rel.months:
        end = add_months(end, rel.months)
    days = day_count(start, end)
    logger.debug(
        "Measured calendar span",
        reference=start.date().isoformat(),
        years=rel.years,
        months=rel.months,
        days=days,
    )
    return days


def to_seconds(
    rel: RelativeOffset,
    reference: Optional[date] = None,
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> Scalar:
    total_days = rel.days + rel.leap_days + calendar_days(rel, reference, settings)
    total = (
        total_days * SECONDS_PER_DAY
        + rel.hours * SECONDS_PER_HOUR
        + rel.minutes * SECONDS_PER_MINUTE
        + rel.seconds
        + rel.milliseconds / 1000
    )
    return clean_float(total, settings)


def to_milliseconds(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_seconds(rel, reference, settings) * 1000, settings)


def to_minutes(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_seconds(rel, reference, settings) / SECONDS_PER_MINUTE, settings)


def to_hours(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_seconds(rel, reference, settings) / SECONDS_PER_HOUR, settings)


def to_days(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_seconds(rel, reference, settings) / SECONDS_PER_DAY, settings)


def to_weeks(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_seconds(rel, reference, settings) / SECONDS_PER_WEEK, settings)


def to_months(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    months = to_days(rel, reference, settings) / settings.mean_month_days
    nearest = round(months)
    # whole-month spans drift off the mean month by up to a couple of days
    if abs(nearest - months) < settings.month_snap_tolerance:
        return int(nearest)
    return clean_float(months, settings)


def to_years(rel, reference=None, settings=DEFAULT_SETTINGS) -> Scalar:
    return clean_float(to_months(rel, reference, settings) / 12, settings)


CONVERTERS: Dict[str, Callable[..., Scalar]] = {
    "milliseconds": to_milliseconds,
    "seconds": to_seconds,
    "minutes": to_minutes,
    "hours": to_hours,
    "days": to_days,
    "weeks": to_weeks,
    "months": to_months,
    "years": to_years,
}


def convert(
    rel: RelativeOffset,
    unit: str,
    reference: Optional[date] = None,
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> Scalar:
    if unit not in CONVERTERS:
        raise KeyError(f"Unknown unit '{unit}'. Available: {sorted(CONVERTERS)}")
    return CONVERTERS[unit](rel, reference, settings)
