"""
Heatmap assembly.

Splits the requested range once, then for every resource fetches its
availability, unavailability and allocation records and computes one
utilization entry per period. The arithmetic is synchronous; the only
suspension points are the per-resource fetches. A failed fetch marks that
resource's row with an error instead of failing the whole heatmap.
"""

from datetime import date
from decimal import Decimal
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Union

from rcm.core.exceptions import ResourceFetchError
from rcm.core.integrations.observability import record_exception
from rcm.core.logging import get_logger
from rcm.engine import allocation as allocation_aggregator
from rcm.engine import availability as availability_resolver
from rcm.engine import unavailability as unavailability_reducer
from rcm.engine.classifier import classify
from rcm.engine.periods import Granularity, split_periods
from rcm.models.resource import Resource
from rcm.schemas.capacity import PeriodUtilization, ResourceCapacityData, TimePeriod
from rcm.schemas.heatmap import (
    HeatmapResource,
    HeatmapResponse,
    ResourceSummary,
    UtilizationPeriod,
)
from rcm.utils.numbers import HUNDRED, ZERO, round_float

logger = get_logger(__name__)

CapacityFetcher = Callable[[Resource], Awaitable[ResourceCapacityData]]


def utilization_percent(
    net_available_hours: Decimal,
    allocated_hours: Decimal,
    total_allocation_percent: Decimal,
) -> Decimal:
    """
    ``allocated / net * 100``, defined for zero capacity.
    
    With no net hours the result is 0 when nothing is allocated, otherwise
    ``max(100, total_allocation_percent)`` so the period classifies as
    OVERUTILIZED and the overallocation stays readable.
    """
    if net_available_hours <= ZERO:
        if total_allocation_percent > ZERO or allocated_hours > ZERO:
            return max(HUNDRED, total_allocation_percent)
        return ZERO
    return allocated_hours / net_available_hours * HUNDRED


def compute_period(period: TimePeriod, data: ResourceCapacityData) -> PeriodUtilization:
    """Resolve, reduce and aggregate one resource's records over one period."""
    resolved = availability_resolver.resolve(data.availability_records, period)
    baseline = availability_resolver.baseline_hours(resolved, period)
    
    reduction = unavailability_reducer.reduce(
        data.unavailability_periods,
        period,
        resolved.hours_per_day if resolved is not None else None,
    )
    # Unavailability cannot take more hours than the period offers
    unavailable_hours = min(reduction.unavailable_hours, baseline)
    net_available_hours = baseline - unavailable_hours
    
    aggregate = allocation_aggregator.aggregate(data.allocations, period, net_available_hours)
    
    return PeriodUtilization(
        period=period,
        baseline_hours=baseline,
        unavailable_hours=unavailable_hours,
        net_available_hours=net_available_hours,
        allocated_hours=aggregate.allocated_hours,
        total_allocation_percent=aggregate.total_allocation_percent,
        utilization_percent=utilization_percent(
            net_available_hours,
            aggregate.allocated_hours,
            aggregate.total_allocation_percent,
        ),
        allocations=aggregate.allocations,
        unavailabilities=reduction.details,
    )


def to_utilization_period(result: PeriodUtilization) -> UtilizationPeriod:
    """Round a period computation into its response shape."""
    return UtilizationPeriod(
        period_start=result.period.start,
        period_end=result.period.end,
        label=result.period.label,
        total_allocation_percent=round_float(result.total_allocation_percent),
        net_available_hours=round_float(result.net_available_hours),
        allocated_hours=round_float(result.allocated_hours),
        unavailable_hours=round_float(result.unavailable_hours),
        utilization_percent=round_float(result.utilization_percent),
        status=classify(result.utilization_percent),
        allocations=result.allocations,
        unavailabilities=result.unavailabilities,
    )


def summarize(results: Sequence[PeriodUtilization]) -> ResourceSummary:
    """Average utilization, total allocated hours and distinct project count."""
    if not results:
        return ResourceSummary(avg_utilization_percent=0, total_hours_allocated=0, active_projects_count=0)
    
    total_utilization = sum((result.utilization_percent for result in results), ZERO)
    total_allocated = sum((result.allocated_hours for result in results), ZERO)
    project_ids = {
        detail.project_id
        for result in results
        for detail in result.allocations
    }
    return ResourceSummary(
        avg_utilization_percent=round_float(total_utilization / len(results)),
        total_hours_allocated=round_float(total_allocated),
        active_projects_count=len(project_ids),
    )


def _primary_assignment(resource: Resource):
    assignments = list(getattr(resource, "department_assignments", None) or [])
    for assignment in assignments:
        if assignment.is_primary:
            return assignment
    return None


def _resource_row(resource: Resource, **fields) -> HeatmapResource:
    assignment = _primary_assignment(resource)
    department = getattr(assignment, "department", None) if assignment is not None else None
    return HeatmapResource(
        id=resource.id,
        resource_type=resource.resource_type,
        name=resource.display_name,
        email=resource.email,
        department_id=assignment.department_id if assignment is not None else None,
        department_name=department.name if department is not None else None,
        **fields,
    )


def compute_resource(
    resource: Resource,
    periods: Iterable[TimePeriod],
    data: ResourceCapacityData,
) -> HeatmapResource:
    """Compute the full heatmap row for one resource."""
    results = [compute_period(period, data) for period in periods]
    return _resource_row(
        resource,
        utilization_periods=[to_utilization_period(result) for result in results],
        summary=summarize(results),
    )


async def assemble(
    resources: Sequence[Resource],
    range_start: date,
    range_end: date,
    granularity: Union[str, Granularity],
    fetch: CapacityFetcher,
    total: Optional[int] = None,
) -> HeatmapResponse:
    """
    Build the heatmap for ``resources`` over ``[range_start, range_end]``.
    
    Args:
        resources: Already-filtered resources, in output order
        range_start: First day of the range (inclusive)
        range_end: Last day of the range (inclusive)
        granularity: daily, weekly or monthly
        fetch: Coroutine function loading one resource's capacity records
        total: Size of the unpaginated resource set, defaults to ``len(resources)``
        
    Raises:
        InvalidRangeError: ``range_end`` is before ``range_start``
        UnknownGranularityError: unrecognised granularity
    """
    periods = split_periods(range_start, range_end, granularity)
    period_list = list(periods)
    period_labels = [period.label for period in period_list]
    
    rows: List[HeatmapResource] = []
    for resource in resources:
        try:
            data = await fetch(resource)
        except Exception as exc:
            error = exc if isinstance(exc, ResourceFetchError) else ResourceFetchError(resource.id, exc)
            logger.warning(
                error.message,
                extra={"resource_id": str(resource.id), "details": error.details},
                exc_info=error.cause or error,
            )
            record_exception(error)
            rows.append(_resource_row(resource, error=error.message))
            continue
        rows.append(compute_resource(resource, period_list, data))
    
    return HeatmapResponse(
        resources=rows,
        period_labels=period_labels,
        total=len(resources) if total is None else total,
    )
