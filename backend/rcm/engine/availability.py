"""
Availability resolution.

Picks the availability record that sets a resource's baseline capacity for a
period. Resolution happens once per period: the record in force on the
period's first day applies to the whole period, even if a newer record takes
over part-way through.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from rcm.models.availability import Availability
from rcm.schemas.capacity import ResolvedAvailability, TimePeriod
from rcm.utils.numbers import ZERO, to_decimal

DAYS_PER_WEEK = Decimal("7")


def _covers(record: Availability, day: date) -> bool:
    return record.effective_from <= day and (
        record.effective_to is None or record.effective_to >= day
    )


def _intersects(record: Availability, period: TimePeriod) -> bool:
    return record.effective_from <= period.end and (
        record.effective_to is None or record.effective_to >= period.start
    )


def _latest(records: Iterable[Availability]) -> Optional[Availability]:
    # max() keeps the first of equal keys, so ties fall back to input order
    return max(records, key=lambda record: record.effective_from, default=None)


def select_record(records: Sequence[Availability], period: TimePeriod) -> Optional[Availability]:
    """
    Return the record that governs ``period``.
    
    The latest-starting record in force on ``period.start`` wins. When nothing
    is in force that day (a resource whose first record starts mid-period),
    the latest-starting record that intersects the period is used instead.
    """
    in_force = _latest(record for record in records if _covers(record, period.start))
    if in_force is not None:
        return in_force
    return _latest(record for record in records if _intersects(record, period))


def resolve(records: Sequence[Availability], period: TimePeriod) -> Optional[ResolvedAvailability]:
    """Resolve the baseline capacity for ``period``, or None when no record applies."""
    record = select_record(records, period)
    if record is None:
        return None
    return ResolvedAvailability(
        hours_per_day=to_decimal(record.hours_per_day),
        days_per_week=to_decimal(record.days_per_week),
        total_hours_per_week=to_decimal(record.total_hours_per_week),
    )


def baseline_hours(availability: Optional[ResolvedAvailability], period: TimePeriod) -> Decimal:
    """Weekly hours scaled to the period length: ``total_hours_per_week * days / 7``."""
    if availability is None:
        return ZERO
    # Multiply before dividing so whole weeks come out exact
    return availability.total_hours_per_week * period.days / DAYS_PER_WEEK
