"""
Resource capacity API endpoints.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from rcm.api.v1.middleware import require_team
from rcm.db.session import get_db
from rcm.controllers.capacity_controller import CapacityController
from rcm.schemas.allocation import AllocationOverlapResponse, AllocationTotalResponse
from rcm.schemas.availability import AvailabilitySummaryResponse, NetAvailableHoursResponse

router = APIRouter()


@router.get("/{resource_id}/net-available-hours", response_model=NetAvailableHoursResponse)
async def get_net_available_hours(
    resource_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    team_id: UUID = Depends(require_team),
    db: AsyncSession = Depends(get_db),
) -> NetAvailableHoursResponse:
    """Net available hours for a resource over an inclusive range."""
    controller = CapacityController(db)
    return await controller.get_net_available_hours(resource_id, team_id, start_date, end_date)


@router.get("/{resource_id}/availability-summary", response_model=AvailabilitySummaryResponse)
async def get_availability_summary(
    resource_id: UUID,
    team_id: UUID = Depends(require_team),
    db: AsyncSession = Depends(get_db),
) -> AvailabilitySummaryResponse:
    """Current availability, upcoming unavailability and near-term net hours."""
    controller = CapacityController(db)
    return await controller.get_availability_summary(resource_id, team_id)


@router.get("/{resource_id}/allocations/total", response_model=AllocationTotalResponse)
async def get_total_allocation(
    resource_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    team_id: UUID = Depends(require_team),
    db: AsyncSession = Depends(get_db),
) -> AllocationTotalResponse:
    """Total active allocation percent over a range."""
    controller = CapacityController(db)
    return await controller.get_total_allocation(resource_id, team_id, start_date, end_date)


@router.get("/{resource_id}/allocation-overlap", response_model=AllocationOverlapResponse)
async def check_allocation_overlap(
    resource_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    allocation_percent: float = Query(..., ge=0),
    exclude_allocation_id: Optional[UUID] = Query(None),
    team_id: UUID = Depends(require_team),
    db: AsyncSession = Depends(get_db),
) -> AllocationOverlapResponse:
    """Check whether a proposed allocation overlaps or overallocates the resource."""
    controller = CapacityController(db)
    return await controller.check_allocation_overlap(
        resource_id,
        team_id,
        start_date,
        end_date,
        allocation_percent,
        exclude_allocation_id=exclude_allocation_id,
    )
