"""
Heatmap Pydantic schemas for request parsing and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date
from uuid import UUID

from rcm.core.config import settings
from rcm.engine.classifier import UtilizationStatus
from rcm.models.resource import ResourceType


class AllocationDetail(BaseModel):
    """Allocation contributing to a utilization period."""
    allocation_id: Optional[UUID] = None
    project_id: UUID
    project_name: str
    project_color: Optional[str] = None
    allocation_percent: float


class UnavailabilityDetail(BaseModel):
    """Unavailability period overlapping a utilization period."""
    unavailability_id: Optional[UUID] = None
    unavailability_type: str
    start_date: date
    end_date: date
    hours: float


class UtilizationPeriod(BaseModel):
    """Capacity figures for one resource in one period."""
    period_start: date
    period_end: date
    label: str
    total_allocation_percent: float
    net_available_hours: float
    allocated_hours: float
    unavailable_hours: float
    utilization_percent: float
    status: UtilizationStatus
    allocations: List[AllocationDetail] = []
    unavailabilities: List[UnavailabilityDetail] = []


class ResourceSummary(BaseModel):
    """Per-resource roll-up across all periods."""
    avg_utilization_percent: float
    total_hours_allocated: float
    active_projects_count: int


class HeatmapResource(BaseModel):
    """One heatmap row. ``error`` is set, and ``summary`` is None, when the resource's data could not be loaded."""
    id: UUID
    resource_type: ResourceType
    name: str
    email: Optional[str] = None
    department_id: Optional[UUID] = None
    department_name: Optional[str] = None
    utilization_periods: List[UtilizationPeriod] = []
    summary: Optional[ResourceSummary] = None
    error: Optional[str] = None


class HeatmapResponse(BaseModel):
    """Heatmap grid with pagination metadata."""
    resources: List[HeatmapResource]
    period_labels: List[str]
    total: int
    page: int = 1
    total_pages: int = 1


class HeatmapFilters(BaseModel):
    """Validated heatmap query parameters."""
    start_date: date
    end_date: date
    granularity: str = settings.HEATMAP_DEFAULT_GRANULARITY
    department_ids: Optional[List[UUID]] = None
    resource_types: Optional[List[ResourceType]] = None
    project_id: Optional[UUID] = None
    search: Optional[str] = Field(None, max_length=200)
    page: int = Field(1, ge=1)
    size: int = Field(settings.HEATMAP_DEFAULT_PAGE_SIZE, ge=1)
    include_unavailability: bool = True
    
    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, value: Optional[str]) -> Optional[str]:
        """Treat whitespace-only search terms as no search."""
        if value is not None and not value.strip():
            return None
        return value.strip() if value is not None else None
