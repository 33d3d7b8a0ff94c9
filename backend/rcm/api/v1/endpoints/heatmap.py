"""
Heatmap API endpoints.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from rcm.api.v1.middleware import require_team
from rcm.core.config import settings
from rcm.db.session import get_db
from rcm.controllers.heatmap_controller import HeatmapController
from rcm.schemas.heatmap import HeatmapFilters, HeatmapResponse

router = APIRouter()


def _parse_array_param(values: Optional[List[str]]) -> Optional[List[str]]:
    """Accept repeated query params as well as comma-separated values."""
    if not values:
        return None
    parsed = [
        item.strip()
        for value in values
        for item in value.split(",")
        if item.strip() and item.strip() != "undefined"
    ]
    return parsed or None


@router.get("", response_model=HeatmapResponse)
async def get_heatmap(
    start_date: date = Query(...),
    end_date: date = Query(...),
    granularity: str = Query(settings.HEATMAP_DEFAULT_GRANULARITY),
    department_ids: Optional[List[str]] = Query(None),
    resource_types: Optional[List[str]] = Query(None),
    project_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    size: int = Query(settings.HEATMAP_DEFAULT_PAGE_SIZE, ge=1, le=settings.HEATMAP_MAX_PAGE_SIZE),
    include_unavailability: bool = Query(True),
    team_id: UUID = Depends(require_team),
    db: AsyncSession = Depends(get_db),
) -> HeatmapResponse:
    """Get heatmap data with utilization calculations."""
    try:
        filters = HeatmapFilters(
            start_date=start_date,
            end_date=end_date,
            granularity=granularity,
            department_ids=_parse_array_param(department_ids),
            resource_types=_parse_array_param(resource_types),
            project_id=project_id,
            search=search,
            page=page,
            size=size,
            include_unavailability=include_unavailability,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    
    controller = HeatmapController(db)
    return await controller.get_heatmap(filters, team_id)
