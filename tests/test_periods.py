"""Tests for calendar period helpers."""

from datetime import date, datetime

import pytest

from pa_scheduler.services.periods import (
    days_between,
    is_weekend,
    parse_date,
    paycheck_period,
    same_month,
    same_paycheck_period,
    same_week,
    week_of_month,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        ("2024-06-01", 1),
        ("2024-06-07", 1),
        ("2024-06-08", 2),
        ("2024-06-14", 2),
        ("2024-06-15", 3),
        ("2024-06-21", 3),
        ("2024-06-22", 4),
        ("2024-06-28", 4),
        ("2024-06-29", 4),  # clamped
        ("2024-05-31", 4),  # clamped
    ],
)
def test_week_of_month(day, expected):
    """Weeks are 7-day buckets from the first of the month, clamped to 1..4."""
    assert week_of_month(day) == expected


def test_paycheck_period_boundaries():
    """Weeks 1-2 are period 1, weeks 3-4 are period 2."""
    assert paycheck_period("2024-06-01") == 1
    assert paycheck_period("2024-06-14") == 1
    assert paycheck_period("2024-06-15") == 2
    assert paycheck_period("2024-06-30") == 2


def test_same_week_and_paycheck():
    assert same_week("2024-06-01", "2024-06-07")
    assert not same_week("2024-06-07", "2024-06-08")
    assert same_paycheck_period("2024-06-01", "2024-06-14")
    assert not same_paycheck_period("2024-06-14", "2024-06-15")


def test_periods_are_month_relative():
    """Week and paycheck are derived from day-of-month only, not ISO weeks."""
    # Monday 2024-07-01 and Saturday 2024-06-01 share week 1
    assert same_week("2024-06-01", "2024-07-01")
    assert same_paycheck_period("2024-06-03", "2024-07-10")
    assert not same_month("2024-06-01", "2024-07-01")


def test_is_weekend():
    """June 1st 2024 is a Saturday."""
    assert is_weekend("2024-06-01")
    assert is_weekend("2024-06-02")
    assert not is_weekend("2024-06-03")
    assert not is_weekend(date(2024, 6, 7))


def test_parse_date_variants():
    assert parse_date("2024-06-03") == date(2024, 6, 3)
    assert parse_date(" 2024-6-3 ") == date(2024, 6, 3)
    assert parse_date("2024-06-03 00:00:00") == date(2024, 6, 3)
    assert parse_date(datetime(2024, 6, 3, 23, 30)) == date(2024, 6, 3)
    assert parse_date(date(2024, 6, 3)) == date(2024, 6, 3)


@pytest.mark.parametrize("value", ["06/03/2024", "2024-13-01", "2024-02-30", "", None, "not-a-date"])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_days_between_is_absolute():
    assert days_between("2024-06-02", "2024-06-03") == 1
    assert days_between("2024-06-03", "2024-06-02") == 1
    assert days_between("2024-05-31", "2024-06-02") == 2
    assert days_between("2024-06-03", "2024-06-03") == 0
