"""
Availability Pydantic schemas for capacity read endpoints.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date
from uuid import UUID

from rcm.models.availability import UnavailabilityType


class AvailabilityRecordResponse(BaseModel):
    """Availability record as stored."""
    id: UUID
    resource_id: UUID
    effective_from: date
    effective_to: Optional[date] = None
    hours_per_day: float
    days_per_week: float
    total_hours_per_week: float
    
    class Config:
        from_attributes = True


class UnavailabilityPeriodResponse(BaseModel):
    """Unavailability period as stored."""
    id: UUID
    resource_id: UUID
    unavailability_type: UnavailabilityType
    start_date: date
    end_date: date
    description: Optional[str] = None
    
    class Config:
        from_attributes = True


class NetAvailableHoursResponse(BaseModel):
    """Capacity of a resource over an arbitrary inclusive range."""
    resource_id: UUID
    start_date: date
    end_date: date
    base_total_hours: float
    unavailable_hours: float
    net_available_hours: float
    availability_records: List[AvailabilityRecordResponse] = []
    unavailability_periods: List[UnavailabilityPeriodResponse] = []


class AvailabilitySummaryResponse(BaseModel):
    """Current capacity snapshot for a resource."""
    resource_id: UUID
    current_availability: Optional[AvailabilityRecordResponse] = None
    upcoming_unavailability: List[UnavailabilityPeriodResponse] = []
    net_available_hours_this_week: float
    net_available_hours_this_month: float
