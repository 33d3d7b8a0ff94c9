"""
Intermediate values produced by the capacity engine.
Hours and percentages are kept as Decimal until a response is built.
"""

from pydantic import BaseModel
from typing import Any, List
from datetime import date
from decimal import Decimal

from rcm.schemas.heatmap import AllocationDetail, UnavailabilityDetail


class TimePeriod(BaseModel):
    """Inclusive date range produced by the period splitter."""
    start: date
    end: date
    label: str
    
    @property
    def days(self) -> int:
        """Number of calendar days in the period, both ends included."""
        return (self.end - self.start).days + 1


class ResolvedAvailability(BaseModel):
    """Baseline capacity that applies to a period."""
    hours_per_day: Decimal
    days_per_week: Decimal
    total_hours_per_week: Decimal


class UnavailabilityReduction(BaseModel):
    """Hours lost to unavailability within a period."""
    unavailable_days: int = 0
    unavailable_hours: Decimal = Decimal("0")
    details: List[UnavailabilityDetail] = []


class AllocationAggregate(BaseModel):
    """Allocations active within a period."""
    allocated_hours: Decimal = Decimal("0")
    total_allocation_percent: Decimal = Decimal("0")
    allocations: List[AllocationDetail] = []


class PeriodUtilization(BaseModel):
    """Full capacity computation for one resource and period, before rounding."""
    period: TimePeriod
    baseline_hours: Decimal
    unavailable_hours: Decimal
    net_available_hours: Decimal
    allocated_hours: Decimal
    total_allocation_percent: Decimal
    utilization_percent: Decimal
    allocations: List[AllocationDetail] = []
    unavailabilities: List[UnavailabilityDetail] = []


class ResourceCapacityData(BaseModel):
    """Persisted records needed to compute one resource's capacity."""
    availability_records: List[Any] = []
    unavailability_periods: List[Any] = []
    allocations: List[Any] = []
