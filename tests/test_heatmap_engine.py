"""
Tests for per-period computation and heatmap assembly.
"""

from datetime import date
from decimal import Decimal

import pytest

from rcm.core.exceptions import InvalidRangeError
from rcm.engine.classifier import UtilizationStatus
from rcm.engine.heatmap import assemble, compute_period, utilization_percent
from rcm.models import ResourceType
from rcm.schemas.capacity import ResourceCapacityData, TimePeriod

from factories import make_allocation, make_availability, make_project, make_resource, make_unavailability


WEEK = TimePeriod(start=date(2024, 1, 1), end=date(2024, 1, 7), label="Jan 1 - Jan 7")


def _fetcher(data_by_resource):
    async def fetch(resource):
        return data_by_resource[resource.id]
    return fetch


def test_half_allocated_week():
    resource = make_resource()
    data = ResourceCapacityData(
        availability_records=[make_availability(resource, date(2023, 6, 1))],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 1, 7), "50")],
    )
    
    result = compute_period(WEEK, data)
    
    assert result.net_available_hours == Decimal("40")
    assert result.allocated_hours == Decimal("20")
    assert result.utilization_percent == Decimal("50")


def test_zero_net_with_allocation_is_overutilized():
    resource = make_resource()
    data = ResourceCapacityData(
        availability_records=[make_availability(resource, date(2023, 6, 1))],
        unavailability_periods=[make_unavailability(resource, date(2024, 1, 1), date(2024, 1, 7))],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 1, 7), "50")],
    )
    
    result = compute_period(WEEK, data)
    
    # 7 days at 8h exceeds the 40h baseline, so unavailability is capped
    assert result.unavailable_hours == Decimal("40")
    assert result.net_available_hours == Decimal("0")
    assert result.utilization_percent == Decimal("100")


def test_zero_net_keeps_overallocation_visible():
    assert utilization_percent(Decimal("0"), Decimal("0"), Decimal("150")) == Decimal("150")
    assert utilization_percent(Decimal("0"), Decimal("0"), Decimal("0")) == Decimal("0")


def test_no_availability_and_no_allocation_is_zero():
    resource = make_resource()
    data = ResourceCapacityData(
        unavailability_periods=[make_unavailability(resource, date(2024, 1, 2), date(2024, 1, 3))],
    )
    
    result = compute_period(WEEK, data)
    
    assert result.baseline_hours == Decimal("0")
    assert result.unavailable_hours == Decimal("0")
    assert result.utilization_percent == Decimal("0")


async def test_assemble_scenario_row():
    resource = make_resource(first_name="Grace", last_name="Hopper")
    project = make_project(name="Compiler")
    data = ResourceCapacityData(
        availability_records=[make_availability(resource, date(2023, 6, 1))],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 1, 7), "50", project=project)],
    )
    
    response = await assemble([resource], date(2024, 1, 1), date(2024, 1, 7), "weekly", _fetcher({resource.id: data}))
    
    assert response.period_labels == ["Jan 1 - Jan 7"]
    assert response.total == 1
    row = response.resources[0]
    assert row.name == "Grace Hopper"
    assert row.error is None
    period = row.utilization_periods[0]
    assert period.allocated_hours == 20.0
    assert period.utilization_percent == 50.0
    assert period.status == UtilizationStatus.UNDERUTILIZED
    assert period.allocations[0].project_name == "Compiler"
    assert row.summary.avg_utilization_percent == 50.0
    assert row.summary.total_hours_allocated == 20.0
    assert row.summary.active_projects_count == 1


async def test_fractional_weekly_hours_do_not_drift():
    resource = make_resource()
    data = ResourceCapacityData(
        availability_records=[
            make_availability(resource, date(2023, 6, 1), hours_per_day="7.5", total_hours_per_week="37.5")
        ],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 1, 28), "80")],
    )
    
    response = await assemble([resource], date(2024, 1, 1), date(2024, 1, 28), "weekly", _fetcher({resource.id: data}))
    
    periods = response.resources[0].utilization_periods
    assert len(periods) == 4
    for period in periods:
        assert period.net_available_hours == 37.5
        assert period.allocated_hours == 30.0
        assert period.utilization_percent == 80.0
        assert period.status == UtilizationStatus.OPTIMAL
    assert response.resources[0].summary.total_hours_allocated == 120.0


async def test_fractional_daily_periods():
    resource = make_resource()
    data = ResourceCapacityData(
        availability_records=[
            make_availability(resource, date(2023, 6, 1), hours_per_day="7.5", total_hours_per_week="37.5")
        ],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 1, 7), "100")],
    )
    
    response = await assemble([resource], date(2024, 1, 1), date(2024, 1, 7), "daily", _fetcher({resource.id: data}))
    
    periods = response.resources[0].utilization_periods
    assert len(periods) == 7
    assert all(period.net_available_hours == 5.36 for period in periods)
    assert all(period.utilization_percent == 100.0 for period in periods)
    assert response.resources[0].summary.total_hours_allocated == 37.5


async def test_failed_fetch_only_marks_that_resource():
    healthy = make_resource(first_name="Alan", last_name="Turing")
    broken = make_resource(first_name="Broken", last_name="Record")
    machine = make_resource(resource_type=ResourceType.EQUIPMENT, equipment_name="Lathe")
    data = ResourceCapacityData(availability_records=[make_availability(healthy, date(2023, 6, 1))])
    
    async def fetch(resource):
        if resource.id == broken.id:
            raise RuntimeError("connection reset")
        return data
    
    response = await assemble([healthy, broken, machine], date(2024, 1, 1), date(2024, 1, 14), "weekly", fetch)
    
    assert [row.id for row in response.resources] == [healthy.id, broken.id, machine.id]
    assert response.resources[0].error is None
    assert len(response.resources[0].utilization_periods) == 2
    
    failed = response.resources[1]
    assert failed.error is not None
    assert str(broken.id) in failed.error
    assert failed.summary is None
    assert failed.utilization_periods == []
    
    assert response.resources[2].name == "Lathe"
    assert response.resources[2].error is None


async def test_assemble_is_idempotent():
    resource = make_resource()
    data = ResourceCapacityData(
        availability_records=[make_availability(resource, date(2023, 6, 1))],
        unavailability_periods=[make_unavailability(resource, date(2024, 1, 9), date(2024, 1, 10))],
        allocations=[make_allocation(resource, date(2024, 1, 1), date(2024, 2, 29), "75")],
    )
    fetch = _fetcher({resource.id: data})
    
    first = await assemble([resource], date(2024, 1, 1), date(2024, 2, 29), "monthly", fetch)
    second = await assemble([resource], date(2024, 1, 1), date(2024, 2, 29), "monthly", fetch)
    
    assert first == second


async def test_assemble_rejects_reversed_range():
    async def fetch(resource):
        raise AssertionError("fetch must not run")
    
    with pytest.raises(InvalidRangeError):
        await assemble([make_resource()], date(2024, 2, 1), date(2024, 1, 1), "daily", fetch)


async def test_assemble_without_resources():
    async def fetch(resource):
        raise AssertionError("fetch must not run")
    
    response = await assemble([], date(2024, 1, 1), date(2024, 1, 3), "daily", fetch, total=0)
    
    assert response.resources == []
    assert response.period_labels == ["Jan 1", "Jan 2", "Jan 3"]
    assert response.total == 0
