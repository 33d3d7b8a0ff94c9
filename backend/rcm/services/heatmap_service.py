"""
Heatmap service.
Loads the filtered resource page and each resource's capacity records, then
hands them to the heatmap assembler.
"""

import math
from datetime import date
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from rcm.core.config import settings
from rcm.core.logging import get_logger
from rcm.db.repositories.allocation_repository import AllocationRepository
from rcm.db.repositories.availability_repository import AvailabilityRepository
from rcm.db.repositories.resource_repository import ResourceRepository
from rcm.db.repositories.unavailability_repository import UnavailabilityRepository
from rcm.engine import heatmap as heatmap_assembler
from rcm.engine.periods import split_periods
from rcm.models.resource import Resource
from rcm.schemas.capacity import ResourceCapacityData
from rcm.schemas.heatmap import HeatmapFilters, HeatmapResponse
from rcm.services.base_service import BaseService

logger = get_logger(__name__)


class HeatmapService(BaseService):
    """Service for resource capacity heatmaps."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.resource_repo = ResourceRepository(session)
        self.availability_repo = AvailabilityRepository(session)
        self.unavailability_repo = UnavailabilityRepository(session)
        self.allocation_repo = AllocationRepository(session)
    
    async def load_capacity_data(
        self,
        resource_id: UUID,
        start_date: date,
        end_date: date,
        include_unavailability: bool = True,
    ) -> ResourceCapacityData:
        """
        Fetch the availability, unavailability and allocation rows for one resource.
        
        Allocations are never narrowed by the heatmap project filter, so a
        resource's utilization is the same whichever filters selected it.
        """
        availability_records = await self.availability_repo.list_by_resource(
            resource_id, start_date, end_date
        )
        unavailability_periods = []
        if include_unavailability:
            unavailability_periods = await self.unavailability_repo.list_in_range(
                resource_id, start_date, end_date
            )
        allocations = await self.allocation_repo.list_active_in_range(
            resource_id, start_date, end_date
        )
        return ResourceCapacityData(
            availability_records=availability_records,
            unavailability_periods=unavailability_periods,
            allocations=allocations,
        )
    
    async def get_heatmap(self, filters: HeatmapFilters, team_id: UUID) -> HeatmapResponse:
        """
        Build the heatmap page for a team.
        
        Range and granularity are validated before any query runs.
        """
        split_periods(filters.start_date, filters.end_date, filters.granularity)
        
        page = filters.page
        size = min(filters.size, settings.HEATMAP_MAX_PAGE_SIZE)
        
        resources, total = await self.resource_repo.list_for_heatmap(
            team_id,
            skip=(page - 1) * size,
            limit=size,
            resource_types=filters.resource_types,
            department_ids=filters.department_ids,
            project_id=filters.project_id,
            search=filters.search,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )
        
        async def fetch(resource: Resource) -> ResourceCapacityData:
            # A failed statement only rolls back its own savepoint
            async with self.session.begin_nested():
                return await self.load_capacity_data(
                    resource.id,
                    filters.start_date,
                    filters.end_date,
                    include_unavailability=filters.include_unavailability,
                )
        
        response = await heatmap_assembler.assemble(
            resources,
            filters.start_date,
            filters.end_date,
            filters.granularity,
            fetch,
            total=total,
        )
        
        failed = sum(1 for row in response.resources if row.error)
        logger.info(
            "Heatmap assembled",
            extra={
                "team_id": str(team_id),
                "granularity": filters.granularity,
                "resources": len(response.resources),
                "periods": len(response.period_labels),
                "failed_resources": failed,
            },
        )
        
        return response.model_copy(
            update={
                "page": page,
                "total_pages": math.ceil(total / size) if total else 0,
            }
        )
