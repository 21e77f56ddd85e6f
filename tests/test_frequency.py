import itertools

import pytest

from budgie.db.models import FREQUENCIES, InvalidLineItem
from budgie.frequency import (
    annualize,
    available_periods,
    convert,
    is_valid_frequency,
    parse_frequency,
    parse_period,
    period_frequency,
)


@pytest.mark.parametrize("f1,f2,f3", list(itertools.product(FREQUENCIES, repeat=3)))
def test_convert_is_transitive(f1, f2, f3):
    assert convert(convert(123.45, f1, f2), f2, f3) == pytest.approx(convert(123.45, f1, f3))


@pytest.mark.parametrize("freq", FREQUENCIES)
def test_convert_identity(freq):
    assert convert(99.99, freq, freq) == 99.99


def test_weekly_annual_factors():
    assert convert(10.0, "weekly", "annually") == 520.0
    assert convert(520.0, "annually", "weekly") == 10.0
    assert convert(7.0, "annually", "weekly") == 7.0 / 52


def test_quarterly_goes_through_annual_basis():
    assert convert(300.0, "quarterly", "monthly") == pytest.approx(100.0)
    assert convert(520.0, "quarterly", "weekly") == pytest.approx(40.0)
    assert annualize(250.0, "quarterly") == 1000.0


def test_fortnightly():
    assert convert(100.0, "weekly", "fortnightly") == 200.0
    assert convert(2600.0, "fortnightly", "annually") == 67600.0


def test_zero_amount():
    for f1, f2 in itertools.product(FREQUENCIES, repeat=2):
        assert convert(0.0, f1, f2) == 0.0


def test_is_valid_frequency():
    assert is_valid_frequency("quarterly")
    assert not is_valid_frequency("daily")
    assert not is_valid_frequency(None)


def test_parse_frequency_aliases():
    assert parse_frequency(" Yearly ") == "annually"
    assert parse_frequency("biweekly") == "fortnightly"
    assert parse_frequency("MONTHLY") == "monthly"
    with pytest.raises(InvalidLineItem):
        parse_frequency("daily")


def test_parse_period():
    assert parse_period("annual") == "annual"
    assert parse_period("year") == "annual"
    assert parse_period("Week") == "weekly"
    assert period_frequency("annual") == "annually"


def test_quarterly_period_is_opt_in():
    assert "quarterly" not in available_periods()
    with pytest.raises(InvalidLineItem):
        parse_period("quarterly")
    assert parse_period("quarter", allow_quarterly=True) == "quarterly"
