"""
Allocation aggregation.

Sums the allocation percentages active in a period and converts them into
hours against the period's net available hours. Sums above 100 are kept as-is
so overallocation stays visible.
"""

from decimal import Decimal
from typing import List, Sequence

from rcm.models.allocation import Allocation
from rcm.schemas.capacity import AllocationAggregate, TimePeriod
from rcm.schemas.heatmap import AllocationDetail
from rcm.utils.numbers import HUNDRED, ZERO, round_float, to_decimal

DEFAULT_PROJECT_COLOR = "#1890ff"


def overlaps(allocation: Allocation, period: TimePeriod) -> bool:
    """True when the allocation's inclusive range shares at least one day with the period."""
    return allocation.start_date <= period.end and allocation.end_date >= period.start


def _detail(allocation: Allocation) -> AllocationDetail:
    project = getattr(allocation, "project", None)
    project_name = getattr(project, "name", None) or f"Project {str(allocation.project_id)[:8]}"
    project_color = getattr(project, "color_code", None) or DEFAULT_PROJECT_COLOR
    return AllocationDetail(
        allocation_id=allocation.id,
        project_id=allocation.project_id,
        project_name=project_name,
        project_color=project_color,
        allocation_percent=round_float(allocation.allocation_percent),
    )


def aggregate(
    allocations: Sequence[Allocation],
    period: TimePeriod,
    net_available_hours: Decimal,
) -> AllocationAggregate:
    """Aggregate active allocations overlapping ``period``."""
    contributing: List[Allocation] = [
        allocation
        for allocation in allocations
        if allocation.is_active is not False and overlaps(allocation, period)
    ]
    if not contributing:
        return AllocationAggregate()
    
    total_percent = sum((to_decimal(allocation.allocation_percent) for allocation in contributing), ZERO)
    return AllocationAggregate(
        allocated_hours=to_decimal(net_available_hours) * total_percent / HUNDRED,
        total_allocation_percent=total_percent,
        allocations=[_detail(allocation) for allocation in contributing],
    )
