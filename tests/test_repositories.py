"""
Tests for repository queries against an in-memory database.
"""

import uuid
from datetime import date

import pytest

from rcm.db.repositories.allocation_repository import AllocationRepository
from rcm.db.repositories.availability_repository import AvailabilityRepository
from rcm.db.repositories.resource_repository import ResourceRepository
from rcm.db.repositories.unavailability_repository import UnavailabilityRepository

from factories import make_allocation, make_availability, make_project, make_resource, make_unavailability


@pytest.fixture
async def resource(test_db_session, team_id):
    resource = make_resource(team_id)
    test_db_session.add(resource)
    await test_db_session.commit()
    return resource


@pytest.mark.asyncio
async def test_get_by_id(test_db_session, resource):
    repo = ResourceRepository(test_db_session)
    
    assert (await repo.get(resource.id)).id == resource.id
    assert await repo.get(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_availability_history(test_db_session, resource):
    older = make_availability(resource, date(2023, 1, 1), effective_to=date(2023, 12, 31))
    newer = make_availability(resource, date(2024, 1, 1), total_hours_per_week="32", hours_per_day="6.4")
    test_db_session.add_all([newer, older])
    await test_db_session.commit()
    repo = AvailabilityRepository(test_db_session)
    
    records = await repo.list_by_resource(resource.id)
    in_range = await repo.list_by_resource(resource.id, date(2024, 3, 1), date(2024, 3, 31))
    
    assert [r.id for r in records] == [older.id, newer.id]
    assert [r.id for r in in_range] == [newer.id]
    assert (await repo.get_effective_on(resource.id, date(2023, 6, 1))).id == older.id
    assert (await repo.get_effective_on(resource.id, date(2024, 6, 1))).id == newer.id
    assert await repo.get_effective_on(resource.id, date(2022, 6, 1)) is None


@pytest.mark.asyncio
async def test_unavailability_range_is_inclusive(test_db_session, resource):
    touching = make_unavailability(resource, date(2024, 1, 31), date(2024, 2, 2))
    outside = make_unavailability(resource, date(2024, 2, 2), date(2024, 2, 3))
    test_db_session.add_all([touching, outside])
    await test_db_session.commit()
    
    found = await UnavailabilityRepository(test_db_session).list_in_range(
        resource.id, date(2024, 1, 1), date(2024, 1, 31)
    )
    
    assert [u.id for u in found] == [touching.id]


@pytest.mark.asyncio
async def test_active_allocations_in_range(test_db_session, resource, team_id):
    apollo = make_project(team_id, "Apollo")
    beta = make_project(team_id, "Beta")
    kept = make_allocation(resource, date(2024, 1, 1), date(2024, 1, 10), project=apollo)
    other_project = make_allocation(resource, date(2024, 1, 5), date(2024, 1, 6), project=beta)
    inactive = make_allocation(resource, date(2024, 1, 1), date(2024, 1, 10), project=apollo, is_active=False)
    later = make_allocation(resource, date(2024, 2, 1), date(2024, 2, 10), project=apollo)
    test_db_session.add_all([apollo, beta, kept, other_project, inactive, later])
    await test_db_session.commit()
    repo = AllocationRepository(test_db_session)
    
    everything = await repo.list_active_in_range(resource.id, date(2024, 1, 1), date(2024, 1, 31))
    excluded = await repo.list_active_in_range(
        resource.id, date(2024, 1, 1), date(2024, 1, 31), exclude_allocation_id=kept.id
    )
    
    assert {a.id for a in everything} == {kept.id, other_project.id}
    assert {a.project.name for a in everything} == {"Apollo", "Beta"}
    assert [a.id for a in excluded] == [other_project.id]
