"""
Unavailability reduction.

Clips each unavailability record to a period, unions the clipped intervals so
a day covered twice is only counted once, and converts the union to hours.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from rcm.models.availability import UnavailabilityPeriod
from rcm.schemas.capacity import TimePeriod, UnavailabilityReduction
from rcm.schemas.heatmap import UnavailabilityDetail
from rcm.utils.numbers import ZERO, round_float, to_decimal

Interval = Tuple[date, date]


def clip(record: UnavailabilityPeriod, period: TimePeriod) -> Optional[Interval]:
    """Intersection of the record with the period, or None when they do not overlap."""
    start = max(record.start_date, period.start)
    end = min(record.end_date, period.end)
    if end < start:
        return None
    return start, end


def merge_intervals(intervals: Sequence[Interval]) -> List[Interval]:
    """Union of inclusive date intervals; adjacent intervals are joined."""
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1] + timedelta(days=1):
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def reduce(
    records: Sequence[UnavailabilityPeriod],
    period: TimePeriod,
    hours_per_day: Optional[Decimal],
) -> UnavailabilityReduction:
    """
    Hours lost to unavailability in ``period``.
    
    Args:
        records: Unavailability periods for one resource, any order
        period: Period to reduce over
        hours_per_day: Resolved hours per day, None when the resource has no baseline
        
    Returns:
        Unioned day count, hours, and one detail entry per overlapping record.
        Detail hours are per record and may add up to more than the unioned total.
    """
    rate = to_decimal(hours_per_day) if hours_per_day is not None else ZERO
    
    clipped_intervals: List[Interval] = []
    details: List[UnavailabilityDetail] = []
    for record in records:
        clipped = clip(record, period)
        if clipped is None:
            continue
        clipped_intervals.append(clipped)
        days = (clipped[1] - clipped[0]).days + 1
        details.append(
            UnavailabilityDetail(
                unavailability_id=record.id,
                unavailability_type=getattr(record.unavailability_type, "value", record.unavailability_type),
                start_date=record.start_date,
                end_date=record.end_date,
                hours=round_float(rate * days),
            )
        )
    
    if not clipped_intervals:
        return UnavailabilityReduction()
    
    unioned_days = sum((end - start).days + 1 for start, end in merge_intervals(clipped_intervals))
    return UnavailabilityReduction(
        unavailable_days=unioned_days,
        unavailable_hours=rate * unioned_days,
        details=details,
    )
