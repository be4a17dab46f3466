# tests/test_month_drift.py

from datetime import date

import pytest

from reldelta.core.settings import DEFAULT_SETTINGS
from reldelta.diagnostics.month_drift import parse_spans, raw_month_drift, reference_dates


def test_reference_dates():
    refs = list(reference_dates(2020, 2020, 1))
    assert len(refs) == 366
    assert refs[0] == date(2020, 1, 1) and refs[-1] == date(2020, 12, 31)
    assert len(list(reference_dates(2020, 2021, 7))) == 105

def test_parse_spans():
    assert parse_spans("1, 2,12") == [1, 2, 12]
    with pytest.raises(SystemExit):
        parse_spans("1,0")

def test_raw_month_drift():
    drift = raw_month_drift(12, [date(2020, 1, 1), date(2021, 1, 1)])
    assert drift[0] == pytest.approx(366 / DEFAULT_SETTINGS.mean_month_days - 12)
    assert drift[1] == pytest.approx(365 / DEFAULT_SETTINGS.mean_month_days - 12)

def test_drift_against_tolerance():
    refs = list(reference_dates(2000, 2003, 1))
    tol = DEFAULT_SETTINGS.month_snap_tolerance
    assert max(abs(x) for x in raw_month_drift(4, refs)) < tol
    assert max(abs(x) for x in raw_month_drift(12, refs)) < tol
    # a 28-day February is too short to read as one mean month
    assert raw_month_drift(1, [date(2001, 2, 1)])[0] < -tol

def test_summarize():
    np = pytest.importorskip("numpy")
    from reldelta.diagnostics.month_drift import summarize

    s = summarize(np, [0.01, -0.02, 0.1], tolerance=0.06)
    assert s["max"] == pytest.approx(0.1)
    assert s["snapped"] == pytest.approx(2 / 3)

def test_main_prints_table(capsys):
    pytest.importorskip("numpy")
    from reldelta.diagnostics.month_drift import main

    assert main(["--start-year", "2020", "--end-year", "2020", "--step-days", "30", "--spans", "1,12"]) == 0
    out = capsys.readouterr().out
    assert "13 reference dates" in out
