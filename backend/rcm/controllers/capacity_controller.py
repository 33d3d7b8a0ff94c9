"""
Capacity controller.
"""

from datetime import date
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from rcm.controllers.base_controller import BaseController
from rcm.services.capacity_service import CapacityService
from rcm.schemas.allocation import AllocationOverlapResponse, AllocationTotalResponse
from rcm.schemas.availability import AvailabilitySummaryResponse, NetAvailableHoursResponse


class CapacityController(BaseController):
    """Controller for single-resource capacity reads."""
    
    def __init__(self, session: AsyncSession):
        self.capacity_service = CapacityService(session)
    
    async def get_net_available_hours(
        self,
        resource_id: UUID,
        team_id: UUID,
        start_date: date,
        end_date: date,
    ) -> NetAvailableHoursResponse:
        """Net available hours over a range."""
        return await self.capacity_service.calculate_net_available_hours(
            resource_id, team_id, start_date, end_date
        )
    
    async def get_availability_summary(
        self,
        resource_id: UUID,
        team_id: UUID,
    ) -> AvailabilitySummaryResponse:
        """Current availability summary."""
        return await self.capacity_service.get_availability_summary(resource_id, team_id)
    
    async def get_total_allocation(
        self,
        resource_id: UUID,
        team_id: UUID,
        start_date: date,
        end_date: date,
    ) -> AllocationTotalResponse:
        """Total allocation percent over a range."""
        return await self.capacity_service.calculate_total_allocation(
            resource_id, team_id, start_date, end_date
        )
    
    async def check_allocation_overlap(
        self,
        resource_id: UUID,
        team_id: UUID,
        start_date: date,
        end_date: date,
        allocation_percent: float,
        exclude_allocation_id: Optional[UUID] = None,
    ) -> AllocationOverlapResponse:
        """Check a proposed allocation for overlap."""
        return await self.capacity_service.check_allocation_overlap(
            resource_id,
            team_id,
            start_date,
            end_date,
            allocation_percent,
            exclude_allocation_id=exclude_allocation_id,
        )
