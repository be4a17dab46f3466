from __future__ import annotations
from datetime import date, datetime


def to_jdn(d: date) -> int:
    """Convert Gregorian date (or the date part of a datetime) to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def day_count(start: date, end: date) -> int:
    """Whole calendar days from start to end; time of day is ignored."""
    return to_jdn(end) - to_jdn(start)

def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0

def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31

def leap_years_through(year: int) -> int:
    """Number of leap years in 1..year (proleptic)."""
    return year // 4 - year // 100 + year // 400

def count_leap_days(start: date, end: date) -> int:
    """
    Number of February 29ths falling on or between the calendar dates of start
    and end (start <= end).
    """
    count = leap_years_through(end.year) - leap_years_through(start.year - 1)
    # partial first year: Feb 29 already behind us
    if is_leap_year(start.year) and start.month > 2:
        count -= 1
    # partial last year: Feb 29 not reached yet
    if is_leap_year(end.year) and (end.month, end.day) < (2, 29):
        count -= 1
    return count

def with_year(d: date, year: int):
    """
    Set the year field. February 29 landing in a common year rolls over to
    March 1 instead of being clamped.
    """
    if d.month == 2 and d.day == 29 and not is_leap_year(year):
        return d.replace(year=year, month=3, day=1)
    return d.replace(year=year)

def add_months(d: date, months: int):
    """Shift by whole months, clamping the day to the target month's length."""
    total = d.month - 1 + months
    year = d.year + total // 12
    month = total % 12 + 1
    return d.replace(year=year, month=month, day=min(d.day, days_in_month(year, month)))

def as_datetime(d: date) -> datetime:
    """Promote a plain date to midnight of that day; datetimes pass through."""
    if isinstance(d, datetime):
        return d
    return datetime(d.year, d.month, d.day)
