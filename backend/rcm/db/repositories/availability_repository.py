"""
Availability repository for database operations.
"""

from datetime import date
from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_

from rcm.db.repositories.base_repository import BaseRepository
from rcm.models.availability import Availability


class AvailabilityRepository(BaseRepository[Availability]):
    """Repository for availability record operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Availability, session)
    
    async def list_by_resource(
        self,
        resource_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Availability]:
        """
        List a resource's availability records ordered by ``effective_from``.
        
        When a range is given only records whose validity interval intersects
        it are returned.
        """
        query = select(Availability).where(Availability.resource_id == resource_id)
        if end_date is not None:
            query = query.where(Availability.effective_from <= end_date)
        if start_date is not None:
            query = query.where(
                or_(
                    Availability.effective_to.is_(None),
                    Availability.effective_to >= start_date,
                )
            )
        query = query.order_by(Availability.effective_from.asc())
        result = await self.session.execute(query)
        return list(result.scalars().all())
    
    async def get_effective_on(self, resource_id: UUID, day: date) -> Optional[Availability]:
        """Get the record in force on ``day``, latest ``effective_from`` first."""
        result = await self.session.execute(
            select(Availability)
            .where(
                and_(
                    Availability.resource_id == resource_id,
                    Availability.effective_from <= day,
                    or_(
                        Availability.effective_to.is_(None),
                        Availability.effective_to >= day,
                    ),
                )
            )
            .order_by(Availability.effective_from.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
