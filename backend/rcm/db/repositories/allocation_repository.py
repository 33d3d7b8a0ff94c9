"""
Allocation repository for database operations.
"""

from datetime import date
from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from sqlalchemy.orm import selectinload

from rcm.db.repositories.base_repository import BaseRepository
from rcm.models.allocation import Allocation


class AllocationRepository(BaseRepository[Allocation]):
    """Repository for allocation operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Allocation, session)
    
    async def list_active_in_range(
        self,
        resource_id: UUID,
        start_date: date,
        end_date: date,
        exclude_allocation_id: Optional[UUID] = None,
    ) -> List[Allocation]:
        """
        List active allocations for a resource overlapping ``[start_date, end_date]``.
        Projects are eager loaded for drill-down names and colors.
        """
        conditions = [
            Allocation.resource_id == resource_id,
            Allocation.is_active == True,
            Allocation.start_date <= end_date,
            Allocation.end_date >= start_date,
        ]
        if exclude_allocation_id is not None:
            conditions.append(Allocation.id != exclude_allocation_id)
        
        query = (
            select(Allocation)
            .options(selectinload(Allocation.project))
            .where(and_(*conditions))
            .order_by(Allocation.start_date.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
