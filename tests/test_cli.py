# tests/test_cli.py

import pytest

from reldelta.cli import _parse_number, _parse_weekday, main


def run(capsys, *argv):
    rc = main(list(argv))
    out, err = capsys.readouterr()
    return rc, out.strip(), err

def test_parse_helpers():
    assert _parse_number("3") == 3 and isinstance(_parse_number("3"), int)
    assert _parse_number("2.5") == 2.5
    assert _parse_weekday("fr:-1") == ("FR", -1)
    assert _parse_weekday("MO") == ("MO", 1)
    assert _parse_weekday("4:2") == (4, 2)

def test_diff(capsys):
    rc, out, _ = run(capsys, "diff", "2021-12-31", "2020-01-01")
    assert rc == 0
    assert out == "RelativeDelta(years=+1, months=+11, days=+30)"

def test_diff_normalized(capsys):
    rc, out, _ = run(capsys, "diff", "2020-01-02T12:00:00", "2020-01-01", "--normalized")
    assert rc == 0
    assert out == "RelativeDelta(days=+1, hours=+12)"

def test_apply_date(capsys):
    rc, out, _ = run(capsys, "apply", "2023-01-01", "--months", "2", "--days", "-1")
    assert rc == 0
    assert out == "2023-02-28"

def test_apply_datetime(capsys):
    rc, out, _ = run(capsys, "apply", "2023-01-01T08:00:00", "--hours", "1.5")
    assert rc == 0
    assert out == "2023-01-01T09:30:00"

def test_apply_weekday(capsys):
    rc, out, _ = run(capsys, "apply", "2023-01-30", "--weekday", "SU:-1")
    assert rc == 0
    assert out == "2023-01-29"

def test_apply_year_day(capsys):
    rc, out, _ = run(capsys, "apply", "2024-06-01", "--year-day", "60")
    assert rc == 0
    assert out == "2024-02-29"

def test_convert_default_unit(capsys):
    rc, out, _ = run(capsys, "convert", "--days", "15")
    assert rc == 0
    assert out == "1296000"

def test_convert_with_reference(capsys):
    rc, out, _ = run(capsys, "convert", "--months", "4", "--reference", "2023-01-01", "--unit", "days")
    assert rc == 0
    assert out == "120"

@pytest.mark.parametrize(
    "argv, message",
    [
        (("apply", "2023-01-01", "--year", "0"), "out of range"),
        (("apply", "2023-01-01", "--months", "1.5"), "Floats are not supported"),
        (("apply", "2023-01-01", "--weekday", "XX"), "Invalid weekday string"),
        (("diff", "2023-13-01", "2023-01-01"), "reldelta: error:"),
    ],
)
def test_errors_exit_2(capsys, argv, message):
    rc, _, err = run(capsys, *argv)
    assert rc == 2
    assert message in err
