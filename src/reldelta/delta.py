"""
reldelta.delta
--------------
RelativeDelta: a relative offset plus absolute overrides, built either from
explicit fields or as the difference between two instants.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import fields, replace
from datetime import date
from numbers import Real
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from .core.errors import (
    NonIntegerError,
    OutOfRangeError,
    RelDeltaError,
    UnpairedDatesError,
    YearDayError,
)
from .core.settings import DEFAULT_SETTINGS, ConversionSettings
from .core.types import ABSOLUTE_FIELDS, RELATIVE_FIELDS, AbsoluteOverride, RelativeOffset
from .engines import convert as _convert
from .engines.apply import apply_delta
from .engines.diff import between as _between
from .engines.normalize import fix
from .weekday import as_weekday

# inclusive ranges of the absolute overrides
ABSOLUTE_RANGES: Dict[str, Tuple[int, int]] = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "millisecond": (0, 999),
}

# cumulative day count at the end of each month of a 366-day year
YEAR_DAY_INDEX: Tuple[int, ...] = (31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 366)

FIELD_DEFAULTS: Dict[str, Any] = {
    "years": 0,
    "months": 0,
    "weeks": 0,
    "days": 0,
    "leap_days": 0,
    "hours": 0,
    "minutes": 0,
    "seconds": 0,
    "milliseconds": 0,
    "year": None,
    "month": None,
    "day": None,
    "hour": None,
    "minute": None,
    "second": None,
    "millisecond": None,
    "weekday": None,
    "year_day": None,
    "non_leap_year_day": None,
}


def _is_whole(value: Any) -> bool:
    return isinstance(value, Real) and math.isfinite(value) and value == math.floor(value)


def resolve_year_day(year_day: Any) -> Tuple[int, int]:
    """Month and day of a 1-based day of a 366-day year."""
    if not _is_whole(year_day):
        raise YearDayError(f"Invalid yearDay value ({year_day})")
    month_index = bisect_left(YEAR_DAY_INDEX, year_day)
    if year_day < 1 or month_index == len(YEAR_DAY_INDEX):
        raise YearDayError(f"Invalid yearDay value ({year_day})")
    day = year_day if month_index == 0 else year_day - YEAR_DAY_INDEX[month_index - 1]
    return month_index + 1, int(day)


def _check_absolute(name: str, value: Any, *, check_range: bool = True) -> Optional[int]:
    if value is None:
        return None
    lo, hi = ABSOLUTE_RANGES[name]
    if not _is_whole(value):
        raise NonIntegerError(
            f"Floats are not supported for parameter '{name}' (expected an integer in {lo}...{hi})"
        )
    if check_range and not (lo <= value <= hi):
        raise OutOfRangeError(f"parameter '{name}' is out of range: {lo}...{hi}")
    return int(value)


def parts_from_fields(
    *,
    years=0,
    months=0,
    weeks=0,
    days=0,
    leap_days=0,
    hours=0,
    minutes=0,
    seconds=0,
    milliseconds=0,
    year=None,
    month=None,
    day=None,
    hour=None,
    minute=None,
    second=None,
    millisecond=None,
    weekday=None,
    year_day=None,
    non_leap_year_day=None,
) -> Tuple[RelativeOffset, AbsoluteOverride]:
    """Validate explicit fields and return the normalized (relative, absolute) pair."""
    if not (_is_whole(years) and _is_whole(months)):
        raise NonIntegerError("Floats are not supported for parameters 'years' and 'months'")

    day_from_year_day = False
    if non_leap_year_day is not None:
        month, day = resolve_year_day(non_leap_year_day)
        day_from_year_day = True
    elif year_day is not None:
        month, day = resolve_year_day(year_day)
        day_from_year_day = True
        if year_day > 59:
            leap_days = -1
    if day_from_year_day:
        logger.debug("Resolved day of year", month=month, day=day, leap_days=leap_days)

    absolute = AbsoluteOverride(
        year=_check_absolute("year", year),
        month=_check_absolute("month", month),
        # a resolved day of year may name day 32 of December; apply clamps it
        day=_check_absolute("day", day, check_range=not day_from_year_day),
        hour=_check_absolute("hour", hour),
        minute=_check_absolute("minute", minute),
        second=_check_absolute("second", second),
        millisecond=_check_absolute("millisecond", millisecond),
        weekday=None if weekday is None else as_weekday(weekday),
    )
    relative = RelativeOffset(
        years=int(years),
        months=int(months),
        days=days + weeks * 7,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        milliseconds=milliseconds,
        leap_days=leap_days,
    )
    return fix(relative), absolute


class RelativeDelta:
    """
    Calendar-aware offset.

    Relative fields (plural names: years, months, days, hours, minutes,
    seconds, milliseconds, leap_days) are added to an instant; absolute fields
    (singular names: year, month, day, hour, minute, second, millisecond,
    weekday) replace the instant's own field before anything is added.

        RelativeDelta(months=1, day=31)            # end of next month
        RelativeDelta(day=31, weekday=FR(-1))      # last Friday of the month
        RelativeDelta(later, earlier)              # later - earlier

    When date1 and date2 are given the explicit fields are ignored.
    """

    __slots__ = ("relative", "absolute")

    def __init__(
        self,
        date1: Optional[date] = None,
        date2: Optional[date] = None,
        *,
        years=0,
        months=0,
        weeks=0,
        days=0,
        leap_days=0,
        hours=0,
        minutes=0,
        seconds=0,
        milliseconds=0,
        year=None,
        month=None,
        day=None,
        hour=None,
        minute=None,
        second=None,
        millisecond=None,
        weekday=None,
        year_day=None,
        non_leap_year_day=None,
    ):
        options = {name: value for name, value in locals().items() if name in FIELD_DEFAULTS}
        if (date1 is None) != (date2 is None):
            raise UnpairedDatesError("Both date1 and date2 must be provided for date comparison.")

        if date1 is not None:
            ignored = sorted(k for k, v in options.items() if v != FIELD_DEFAULTS[k])
            if ignored:
                logger.debug("Date difference overrides explicit fields", ignored=ignored)
            relative, absolute = _between(date1, date2), AbsoluteOverride()
        else:
            try:
                relative, absolute = parts_from_fields(**options)
            except RelDeltaError as e:
                logger.debug("Rejected delta fields", error=str(e))
                raise
        object.__setattr__(self, "relative", relative)
        object.__setattr__(self, "absolute", absolute)

    @classmethod
    def from_parts(cls, relative: RelativeOffset, absolute: Optional[AbsoluteOverride] = None) -> "RelativeDelta":
        """Wrap already validated parts; the relative part is normalized."""
        obj = cls.__new__(cls)
        object.__setattr__(obj, "relative", fix(relative))
        object.__setattr__(obj, "absolute", absolute if absolute is not None else AbsoluteOverride())
        return obj

    @classmethod
    def between(cls, date1: date, date2: date, *, count_leap_days: bool = False) -> "RelativeDelta":
        """
        date1 - date2 as a delta. With count_leap_days the February 29ths
        spanned are also recorded in leap_days.
        """
        return cls.from_parts(_between(date1, date2, count_leap_days_spanned=count_leap_days))

    def __setattr__(self, name, value):
        raise AttributeError("RelativeDelta is immutable")

    def __reduce__(self):
        return (RelativeDelta.from_parts, (self.relative, self.absolute))

    # ---------------------------------------------------------
    # Application
    # ---------------------------------------------------------

    def apply_to_date(self, instant):
        return apply_delta(instant, self.relative, self.absolute)

    def __add__(self, other):
        if isinstance(other, RelativeDelta):
            a, b = self.relative, other.relative
            relative = RelativeOffset(**{f: getattr(a, f) + getattr(b, f) for f in RELATIVE_FIELDS})
            absolute = AbsoluteOverride(**{
                f: getattr(other.absolute, f) if getattr(other.absolute, f) is not None else getattr(self.absolute, f)
                for f in ABSOLUTE_FIELDS
            })
            return RelativeDelta.from_parts(relative, absolute)
        if isinstance(other, date):
            return self.apply_to_date(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, RelativeDelta):
            a, b = self.relative, other.relative
            relative = RelativeOffset(**{f: getattr(a, f) - getattr(b, f) for f in RELATIVE_FIELDS})
            absolute = AbsoluteOverride(**{
                f: getattr(self.absolute, f) if getattr(self.absolute, f) is not None else getattr(other.absolute, f)
                for f in ABSOLUTE_FIELDS
            })
            return RelativeDelta.from_parts(relative, absolute)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, date):
            return (-self).apply_to_date(other)
        return NotImplemented

    def __neg__(self):
        relative = RelativeOffset(**{f: -getattr(self.relative, f) for f in RELATIVE_FIELDS})
        return RelativeDelta.from_parts(relative, self.absolute)

    def __mul__(self, other):
        if not isinstance(other, Real) or isinstance(other, bool):
            return NotImplemented
        r = self.relative
        relative = RelativeOffset(
            years=int(r.years * other),
            months=int(r.months * other),
            days=r.days * other,
            hours=r.hours * other,
            minutes=r.minutes * other,
            seconds=r.seconds * other,
            milliseconds=r.milliseconds * other,
            leap_days=int(r.leap_days * other),
        )
        return RelativeDelta.from_parts(relative, self.absolute)

    __rmul__ = __mul__

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------

    def to_milliseconds(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_milliseconds(self.relative, reference, settings)

    def to_seconds(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_seconds(self.relative, reference, settings)

    def to_minutes(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_minutes(self.relative, reference, settings)

    def to_hours(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_hours(self.relative, reference, settings)

    def to_days(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_days(self.relative, reference, settings)

    def to_weeks(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_weeks(self.relative, reference, settings)

    def to_months(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_months(self.relative, reference, settings)

    def to_years(self, reference: Optional[date] = None, *, settings: ConversionSettings = DEFAULT_SETTINGS):
        return _convert.to_years(self.relative, reference, settings)

    def normalized(self, *, settings: ConversionSettings = DEFAULT_SETTINGS) -> "RelativeDelta":
        """
        Carry fractional days/hours/minutes/seconds down into whole smaller
        units. Years, months, leap_days and absolute overrides are kept.

            RelativeDelta(weeks=2.5, days=1.5, hours=2.3).normalized()
            == RelativeDelta(days=19, hours=2, minutes=18)
        """
        r = self.relative

        def clean(x):
            return _convert.clean_float(x, settings)

        days = math.trunc(r.days)
        hours_f = clean(r.hours + 24 * (r.days - days))
        hours = math.trunc(hours_f)
        minutes_f = clean(r.minutes + 60 * (hours_f - hours))
        minutes = math.trunc(minutes_f)
        seconds_f = clean(r.seconds + 60 * (minutes_f - minutes))
        seconds = math.floor(seconds_f)
        milliseconds = round(r.milliseconds + 1000 * (seconds_f - seconds))
        relative = replace(
            r, days=days, hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds
        )
        return RelativeDelta.from_parts(relative, self.absolute)

    # ---------------------------------------------------------
    # Value protocol
    # ---------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, RelativeDelta):
            return NotImplemented
        return self.relative == other.relative and self.absolute == other.absolute

    def __hash__(self):
        return hash((self.relative, self.absolute))

    def __bool__(self):
        return not (self.relative.is_zero() and self.absolute.is_empty)

    def __repr__(self) -> str:
        parts = []
        for f in fields(RelativeOffset):
            value = getattr(self.relative, f.name)
            if value:
                parts.append(f"{f.name}={value:+}")
        for f in fields(AbsoluteOverride):
            value = getattr(self.absolute, f.name)
            if value is not None:
                parts.append(f"{f.name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


def _delegate(part: str, name: str) -> property:
    return property(lambda self: getattr(getattr(self, part), name))


for _name in RELATIVE_FIELDS:
    setattr(RelativeDelta, _name, _delegate("relative", _name))
for _name in ABSOLUTE_FIELDS:
    setattr(RelativeDelta, _name, _delegate("absolute", _name))
del _name
