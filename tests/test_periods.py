"""
Tests for splitting date ranges into daily, weekly and monthly periods.
"""

from datetime import date, timedelta

import pytest

from rcm.core.exceptions import InvalidRangeError, UnknownGranularityError
from rcm.engine.periods import Granularity, calculate_days_between, parse_granularity, split_periods


def _assert_contiguous(periods, start, end):
    assert periods[0].start == start
    assert periods[-1].end == end
    for previous, current in zip(periods, periods[1:]):
        assert current.start == previous.end + timedelta(days=1)
    for period in periods:
        assert period.start <= period.end


def test_days_between_adjacent_days():
    assert calculate_days_between(date(2024, 1, 15), date(2024, 1, 16)) == 1


def test_days_between_leap_february():
    assert calculate_days_between(date(2024, 2, 1), date(2024, 3, 1)) == 29


def test_days_between_same_day_is_zero():
    assert calculate_days_between(date(2024, 5, 5), date(2024, 5, 5)) == 0


def test_daily_ten_days():
    periods = list(split_periods(date(2024, 1, 1), date(2024, 1, 10), "daily"))
    
    assert len(periods) == 10
    assert all(period.start == period.end for period in periods)
    _assert_contiguous(periods, date(2024, 1, 1), date(2024, 1, 10))
    assert periods[0].label == "Jan 1"


def test_single_day_range_yields_one_period():
    for granularity in Granularity:
        periods = list(split_periods(date(2024, 3, 9), date(2024, 3, 9), granularity))
        assert len(periods) == 1
        assert periods[0].start == periods[0].end == date(2024, 3, 9)


def test_weekly_truncates_last_period():
    periods = list(split_periods(date(2024, 1, 1), date(2024, 1, 17), "weekly"))
    
    assert [(p.start, p.end) for p in periods] == [
        (date(2024, 1, 1), date(2024, 1, 7)),
        (date(2024, 1, 8), date(2024, 1, 14)),
        (date(2024, 1, 15), date(2024, 1, 17)),
    ]
    assert periods[0].label == "Jan 1 - Jan 7"
    _assert_contiguous(periods, date(2024, 1, 1), date(2024, 1, 17))


def test_weekly_starts_on_requested_day():
    periods = list(split_periods(date(2024, 1, 3), date(2024, 1, 16), "weekly"))
    
    assert periods[0].start == date(2024, 1, 3)
    assert periods[0].end == date(2024, 1, 9)
    assert periods[1].end == date(2024, 1, 16)


def test_monthly_clips_both_ends():
    periods = list(split_periods(date(2024, 1, 15), date(2024, 3, 10), "monthly"))
    
    assert [(p.start, p.end) for p in periods] == [
        (date(2024, 1, 15), date(2024, 1, 31)),
        (date(2024, 2, 1), date(2024, 2, 29)),
        (date(2024, 3, 1), date(2024, 3, 10)),
    ]
    assert [p.label for p in periods] == ["Jan 2024", "Feb 2024", "Mar 2024"]


def test_monthly_non_leap_february():
    periods = list(split_periods(date(2023, 2, 1), date(2023, 2, 28), "monthly"))
    
    assert len(periods) == 1
    assert periods[0].days == 28


def test_monthly_crosses_year_boundary():
    periods = list(split_periods(date(2023, 12, 20), date(2024, 1, 5), "monthly"))
    
    assert [p.label for p in periods] == ["Dec 2023", "Jan 2024"]
    _assert_contiguous(periods, date(2023, 12, 20), date(2024, 1, 5))


def test_sequence_is_restartable():
    sequence = split_periods(date(2024, 1, 1), date(2024, 2, 15), "weekly")
    
    first = list(sequence)
    second = list(sequence)
    
    assert first == second
    assert len(sequence) == len(first) == 7
    assert sequence.labels() == [period.label for period in first]


def test_end_before_start_raises():
    with pytest.raises(InvalidRangeError) as exc_info:
        split_periods(date(2024, 1, 10), date(2024, 1, 1), "daily")
    
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("granularity", ["hourly", "", "yearly"])
def test_unknown_granularity_raises(granularity):
    with pytest.raises(UnknownGranularityError) as exc_info:
        split_periods(date(2024, 1, 1), date(2024, 1, 10), granularity)
    
    assert exc_info.value.details["allowed"] == ["daily", "weekly", "monthly"]


def test_granularity_is_case_insensitive():
    assert parse_granularity(" Monthly ") == Granularity.MONTHLY
