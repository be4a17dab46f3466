# tests/test_apply.py

from datetime import date, datetime

import pytest

from reldelta import FR, MO, SA, SU, TH, TU, WE, RelativeDelta, apply


def test_apply_to_date():
    assert RelativeDelta(months=2, days=-1).apply_to_date(date(2023, 1, 1)) == date(2023, 2, 28)

def test_leap_year_clamp():
    assert RelativeDelta(months=1, day=31).apply_to_date(date(2020, 1, 31)) == date(2020, 2, 29)

def test_leap_days_in_normal_year():
    assert RelativeDelta(months=4, leap_days=10).apply_to_date(date(2023, 1, 31)) == date(2023, 5, 31)

def test_leap_days_in_leap_year():
    assert RelativeDelta(months=4, leap_days=10).apply_to_date(date(2020, 1, 31)) == date(2020, 6, 10)

def test_year_day():
    assert RelativeDelta(year_day=345).apply_to_date(date(2023, 1, 31)) == date(2023, 12, 11)
    assert RelativeDelta(year_day=345).apply_to_date(date(2020, 1, 31)) == date(2020, 12, 10)
    assert RelativeDelta(year_day=60).apply_to_date(date(2020, 6, 1)) == date(2020, 2, 29)
    assert RelativeDelta(year_day=60).apply_to_date(date(2021, 6, 1)) == date(2021, 3, 1)

def test_non_leap_year_day():
    assert RelativeDelta(non_leap_year_day=345).apply_to_date(date(2023, 1, 31)) == date(2023, 12, 11)
    assert RelativeDelta(non_leap_year_day=345).apply_to_date(date(2020, 1, 31)) == date(2020, 12, 11)
    assert RelativeDelta(non_leap_year_day=366).apply_to_date(date(2023, 1, 31)) == date(2023, 12, 31)

def test_absolute_month_keeps_day_clamped():
    assert RelativeDelta(month=2).apply_to_date(date(2023, 3, 31)) == date(2023, 2, 28)
    assert RelativeDelta(month=4, day=31).apply_to_date(date(2023, 1, 5)) == date(2023, 4, 30)
    assert RelativeDelta(day=31).apply_to_date(date(2020, 2, 14)) == date(2020, 2, 29)

def test_second_to_last_day_of_month():
    assert RelativeDelta(day=31, days=-1).apply_to_date(date(2023, 4, 10)) == date(2023, 4, 29)

def test_absolute_year_rolls_leap_day():
    assert RelativeDelta(year=2021).apply_to_date(date(2020, 2, 29)) == date(2021, 3, 1)
    assert RelativeDelta(years=1).apply_to_date(date(2020, 2, 29)) == date(2021, 3, 1)

def test_overrides_before_offsets():
    d = RelativeDelta(year=2000, month=1, day=1, hour=0, years=1, hours=5)
    assert d.apply_to_date(datetime(2023, 7, 9, 14, 30)) == datetime(2001, 1, 1, 5, 30)

def test_time_overrides():
    d = RelativeDelta(hour=0, minute=0, second=0, millisecond=5)
    assert d.apply_to_date(datetime(2023, 1, 1, 13, 14, 15, 123456)) == datetime(2023, 1, 1, 0, 0, 0, 5000)

def test_date_stays_date_without_time_fields():
    out = RelativeDelta(days=3).apply_to_date(date(2023, 1, 1))
    assert type(out) is date

def test_date_promoted_by_time_fields():
    assert RelativeDelta(hour=10).apply_to_date(date(2023, 1, 1)) == datetime(2023, 1, 1, 10)
    assert RelativeDelta(hours=36).apply_to_date(date(2023, 1, 1)) == datetime(2023, 1, 2, 12)
    assert RelativeDelta(days=1.5).apply_to_date(date(2023, 1, 1)) == datetime(2023, 1, 2, 12)

def test_input_not_mutated():
    d0 = datetime(2023, 1, 31, 8)
    RelativeDelta(months=1, hours=3).apply_to_date(d0)
    assert d0 == datetime(2023, 1, 31, 8)

def test_operators():
    assert date(2023, 1, 31) + RelativeDelta(months=1) == date(2023, 2, 28)
    assert RelativeDelta(months=1) + date(2023, 1, 31) == date(2023, 2, 28)
    assert date(2023, 1, 31) - RelativeDelta(months=1) == date(2022, 12, 31)
    assert datetime(2023, 3, 1, 12) - RelativeDelta(hours=13) == datetime(2023, 2, 28, 23)

def test_api_apply():
    assert apply(date(2023, 1, 1), months=2, days=-1) == date(2023, 2, 28)
    assert apply(date(2023, 1, 1), RelativeDelta(days=1)) == date(2023, 1, 2)
    with pytest.raises(TypeError):
        apply(date(2023, 1, 1), RelativeDelta(days=1), days=2)

# January 30th 2023 is a Monday

MONDAY = date(2023, 1, 30)

@pytest.mark.parametrize(
    "weekday, expected",
    [
        (MO(1), date(2023, 1, 30)),
        (TU(1), date(2023, 1, 31)),
        (WE(1), date(2023, 2, 1)),
        (TH(1), date(2023, 2, 2)),
        (FR(1), date(2023, 2, 3)),
        (SA(1), date(2023, 2, 4)),
        (SU(1), date(2023, 2, 5)),
        (MO(2), date(2023, 2, 6)),
        (MO(0), date(2023, 1, 30)),
        (("MO", -1), date(2023, 1, 30)),
        (("SU", -1), date(2023, 1, 29)),
        (TU(-1), date(2023, 1, 24)),
        (("MO", 1000), date(2042, 3, 24)),
        (("MO", -1000), date(2003, 12, 8)),
    ],
)
def test_weekday_search(weekday, expected):
    assert RelativeDelta(weekday=weekday).apply_to_date(MONDAY) == expected

def test_bare_weekday_inputs():
    assert RelativeDelta(weekday=0).apply_to_date(date(2023, 2, 1)) == date(2023, 2, 6)
    assert RelativeDelta(weekday="MO").apply_to_date(date(2023, 2, 1)) == date(2023, 2, 6)

def test_first_and_last_weekday_of_month():
    assert RelativeDelta(day=1, weekday=MO).apply_to_date(date(2023, 1, 15)) == date(2023, 1, 2)
    assert RelativeDelta(day=31, weekday=FR(-1)).apply_to_date(date(2023, 1, 15)) == date(2023, 1, 27)
