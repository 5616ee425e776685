import pytest

from schedule_sensei.utils import lag_to_iso, parse_iso_duration, to_work_days


@pytest.mark.parametrize("value,hours", [
    ("PT64H0M0S", 64.0),
    ("PT0H", 0.0),
    ("PT7H30M0S", 7.5),
    ("P1DT2H", 26.0),
    ("-PT8H0M0S", -8.0),
])
def test_parse_iso_duration(value, hours):
    assert parse_iso_duration(value) == hours


@pytest.mark.parametrize("value", ["", None, "PT", "64h", "P"])
def test_parse_iso_duration_rejects(value):
    assert parse_iso_duration(value) is None


def test_to_work_days_uses_eight_hour_days():
    assert to_work_days("PT64H0M0S") == 8.0
    assert to_work_days("PT12H0M0S") == 1.5
    assert to_work_days("garbage") is None


def test_lag_to_iso():
    assert lag_to_iso(0) == "PT0H0M0S"
    assert lag_to_iso(4800) == "PT8H0M0S"
    assert lag_to_iso(-2400) == "-PT4H0M0S"
    assert lag_to_iso(150) == "PT0H15M0S"
