"""
Unavailability period repository for database operations.
"""

from datetime import date
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from rcm.db.repositories.base_repository import BaseRepository
from rcm.models.availability import UnavailabilityPeriod


class UnavailabilityRepository(BaseRepository[UnavailabilityPeriod]):
    """Repository for unavailability period operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(UnavailabilityPeriod, session)
    
    async def list_in_range(
        self,
        resource_id: UUID,
        start_date: date,
        end_date: date,
    ) -> List[UnavailabilityPeriod]:
        """List periods for a resource that overlap ``[start_date, end_date]``."""
        query = (
            select(UnavailabilityPeriod)
            .where(
                and_(
                    UnavailabilityPeriod.resource_id == resource_id,
                    UnavailabilityPeriod.start_date <= end_date,
                    UnavailabilityPeriod.end_date >= start_date,
                )
            )
            .order_by(UnavailabilityPeriod.start_date.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
