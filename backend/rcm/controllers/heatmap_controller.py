"""
Heatmap controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from rcm.controllers.base_controller import BaseController
from rcm.services.heatmap_service import HeatmapService
from rcm.schemas.heatmap import HeatmapFilters, HeatmapResponse


class HeatmapController(BaseController):
    """Controller for heatmap operations."""
    
    def __init__(self, session: AsyncSession):
        self.heatmap_service = HeatmapService(session)
    
    async def get_heatmap(self, filters: HeatmapFilters, team_id: UUID) -> HeatmapResponse:
        """Get heatmap data with utilization calculations."""
        return await self.heatmap_service.get_heatmap(filters, team_id)
