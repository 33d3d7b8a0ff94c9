"""
Calendar/period splitting for capacity heatmaps.

A requested ``[start, end]`` range (both inclusive) is cut into contiguous,
non-overlapping periods of daily, weekly or monthly granularity. The last
period is truncated at ``end``; monthly periods are aligned to calendar
months and clipped at both ends.
"""

import calendar
import enum
from datetime import date, timedelta
from typing import Iterator, List, Union

from rcm.core.exceptions import InvalidRangeError, UnknownGranularityError
from rcm.schemas.capacity import TimePeriod

ONE_DAY = timedelta(days=1)


class Granularity(str, enum.Enum):
    """Bucket size used to split a date range."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def parse_granularity(value: Union[str, Granularity]) -> Granularity:
    """Coerce a query value to Granularity, raising UnknownGranularityError."""
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).strip().lower())
    except ValueError:
        raise UnknownGranularityError(value) from None


def calculate_days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (2024-01-15 -> 2024-01-16 is 1)."""
    return (end - start).days


def _short_label(day: date) -> str:
    return f"{day:%b} {day.day}"


def _period_label(start: date, end: date, granularity: Granularity) -> str:
    if granularity == Granularity.DAILY:
        return _short_label(start)
    if granularity == Granularity.WEEKLY:
        return f"{_short_label(start)} - {_short_label(end)}"
    return f"{start:%b %Y}"


def _month_end(day: date) -> date:
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last_day)


class PeriodSequence:
    """
    Lazy, restartable sequence of periods covering a date range.
    
    Each call to ``iter()`` walks the range again from the start, so the same
    object can be consumed several times. Validation happens on construction.
    """
    
    def __init__(self, start: date, end: date, granularity: Union[str, Granularity]):
        if end < start:
            raise InvalidRangeError(start, end)
        self.start = start
        self.end = end
        self.granularity = parse_granularity(granularity)
    
    def _next_end(self, current: date) -> date:
        if self.granularity == Granularity.DAILY:
            candidate = current
        elif self.granularity == Granularity.WEEKLY:
            candidate = current + timedelta(days=6)
        else:
            candidate = _month_end(current)
        return min(candidate, self.end)
    
    def __iter__(self) -> Iterator[TimePeriod]:
        current = self.start
        while current <= self.end:
            period_end = self._next_end(current)
            yield TimePeriod(
                start=current,
                end=period_end,
                label=_period_label(current, period_end, self.granularity),
            )
            current = period_end + ONE_DAY
    
    def __len__(self) -> int:
        return sum(1 for _ in self)
    
    def labels(self) -> List[str]:
        return [period.label for period in self]


def split_periods(
    start: date,
    end: date,
    granularity: Union[str, Granularity],
) -> PeriodSequence:
    """
    Split ``[start, end]`` into periods of the given granularity.
    
    Raises:
        InvalidRangeError: ``end`` is before ``start``
        UnknownGranularityError: granularity is not daily, weekly or monthly
    """
    return PeriodSequence(start, end, granularity)
