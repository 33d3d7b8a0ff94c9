"""
Capacity service.
Single-resource capacity reads: net available hours over a range, the
current availability summary, and allocation totals and overlap checks.
"""

from datetime import date, timedelta
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from rcm.core.config import settings
from rcm.core.exceptions import InvalidRangeError, ResourceNotFoundError
from rcm.db.repositories.allocation_repository import AllocationRepository
from rcm.db.repositories.availability_repository import AvailabilityRepository
from rcm.db.repositories.resource_repository import ResourceRepository
from rcm.db.repositories.unavailability_repository import UnavailabilityRepository
from rcm.engine.heatmap import compute_period
from rcm.models.resource import Resource
from rcm.schemas.allocation import (
    AllocationOverlapResponse,
    AllocationResponse,
    AllocationTotalResponse,
)
from rcm.schemas.availability import (
    AvailabilityRecordResponse,
    AvailabilitySummaryResponse,
    NetAvailableHoursResponse,
    UnavailabilityPeriodResponse,
)
from rcm.schemas.capacity import ResourceCapacityData, TimePeriod
from rcm.services.base_service import BaseService
from rcm.utils.numbers import HUNDRED, ZERO, round_float, to_decimal


def _week_bounds(day: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing ``day``."""
    days_since_sunday = (day.weekday() + 1) % 7
    start = day - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=6)


def _month_bounds(day: date) -> tuple[date, date]:
    start = day.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


class CapacityService(BaseService):
    """Service for single-resource capacity reads."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.resource_repo = ResourceRepository(session)
        self.availability_repo = AvailabilityRepository(session)
        self.unavailability_repo = UnavailabilityRepository(session)
        self.allocation_repo = AllocationRepository(session)
    
    async def _get_resource(self, resource_id: UUID, team_id: UUID) -> Resource:
        resource = await self.resource_repo.get(resource_id)
        if not resource or resource.team_id != team_id:
            raise ResourceNotFoundError(resource_id)
        return resource
    
    async def _net_available_hours(
        self,
        resource_id: UUID,
        start_date: date,
        end_date: date,
    ) -> NetAvailableHoursResponse:
        if end_date < start_date:
            raise InvalidRangeError(start_date, end_date)
        
        availability_records = await self.availability_repo.list_by_resource(
            resource_id, start_date, end_date
        )
        unavailability_periods = await self.unavailability_repo.list_in_range(
            resource_id, start_date, end_date
        )
        period = TimePeriod(
            start=start_date,
            end=end_date,
            label=f"{start_date.isoformat()} - {end_date.isoformat()}",
        )
        result = compute_period(
            period,
            ResourceCapacityData(
                availability_records=availability_records,
                unavailability_periods=unavailability_periods,
            ),
        )
        return NetAvailableHoursResponse(
            resource_id=resource_id,
            start_date=start_date,
            end_date=end_date,
            base_total_hours=round_float(result.baseline_hours),
            unavailable_hours=round_float(result.unavailable_hours),
            net_available_hours=round_float(result.net_available_hours),
            availability_records=[
                AvailabilityRecordResponse.model_validate(record) for record in availability_records
            ],
            unavailability_periods=[
                UnavailabilityPeriodResponse.model_validate(record) for record in unavailability_periods
            ],
        )
    
    async def calculate_net_available_hours(
        self,
        resource_id: UUID,
        team_id: UUID,
        start_date: date,
        end_date: date,
    ) -> NetAvailableHoursResponse:
        """
        Net available hours for ``[start_date, end_date]`` treated as one period.
        
        The availability record in force on ``start_date`` applies to the whole range.
        """
        await self._get_resource(resource_id, team_id)
        return await self._net_available_hours(resource_id, start_date, end_date)
    
    async def get_availability_summary(
        self,
        resource_id: UUID,
        team_id: UUID,
        today: Optional[date] = None,
    ) -> AvailabilitySummaryResponse:
        """Current availability, upcoming unavailability, and this week's and month's net hours."""
        await self._get_resource(resource_id, team_id)
        today = today or date.today()
        
        current = await self.availability_repo.get_effective_on(resource_id, today)
        upcoming = await self.unavailability_repo.list_in_range(
            resource_id,
            today,
            today + timedelta(days=settings.UPCOMING_UNAVAILABILITY_DAYS),
        )
        
        week = await self._net_available_hours(resource_id, *_week_bounds(today))
        month = await self._net_available_hours(resource_id, *_month_bounds(today))
        
        return AvailabilitySummaryResponse(
            resource_id=resource_id,
            current_availability=(
                AvailabilityRecordResponse.model_validate(current) if current else None
            ),
            upcoming_unavailability=[
                UnavailabilityPeriodResponse.model_validate(record) for record in upcoming
            ],
            net_available_hours_this_week=week.net_available_hours,
            net_available_hours_this_month=month.net_available_hours,
        )
    
    async def calculate_total_allocation(
        self,
        resource_id: UUID,
        team_id: UUID,
        start_date: date,
        end_date: date,
    ) -> AllocationTotalResponse:
        """Sum of active allocation percents overlapping the range. Not clamped at 100."""
        await self._get_resource(resource_id, team_id)
        if end_date < start_date:
            raise InvalidRangeError(start_date, end_date)
        
        allocations = await self.allocation_repo.list_active_in_range(resource_id, start_date, end_date)
        total = sum((to_decimal(allocation.allocation_percent) for allocation in allocations), ZERO)
        return AllocationTotalResponse(
            resource_id=resource_id,
            total_allocation_percent=round_float(total),
            allocations=[AllocationResponse.model_validate(allocation) for allocation in allocations],
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
        """
        Check a proposed allocation against the resource's active allocations.
        
        ``has_overlap`` is set when any active allocation shares a day with the
        range or when the combined percent would exceed 100.
        """
        await self._get_resource(resource_id, team_id)
        if end_date < start_date:
            raise InvalidRangeError(start_date, end_date)
        
        overlapping = await self.allocation_repo.list_active_in_range(
            resource_id,
            start_date,
            end_date,
            exclude_allocation_id=exclude_allocation_id,
        )
        existing = sum((to_decimal(allocation.allocation_percent) for allocation in overlapping), ZERO)
        total_with_new = existing + to_decimal(allocation_percent)
        
        return AllocationOverlapResponse(
            has_overlap=bool(overlapping) or total_with_new > HUNDRED,
            total_allocation_percent=round_float(total_with_new),
            overlapping_allocations=[
                AllocationResponse.model_validate(allocation) for allocation in overlapping
            ],
        )
