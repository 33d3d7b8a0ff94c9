"""
Resource repository for database operations.
"""

from datetime import date
from typing import Optional, List, Sequence, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_, or_
from sqlalchemy.orm import selectinload

from rcm.db.repositories.base_repository import BaseRepository
from rcm.models.allocation import Allocation
from rcm.models.department import ResourceDepartmentAssignment
from rcm.models.resource import Resource, ResourceType


class ResourceRepository(BaseRepository[Resource]):
    """Repository for resource operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Resource, session)
    
    def _base_query(self):
        return select(Resource).options(
            selectinload(Resource.department_assignments).selectinload(
                ResourceDepartmentAssignment.department
            ),
        )
    
    def _filter_conditions(
        self,
        team_id: UUID,
        resource_types: Optional[Sequence[ResourceType]] = None,
        department_ids: Optional[Sequence[UUID]] = None,
        project_id: Optional[UUID] = None,
        search: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list:
        conditions = [
            Resource.team_id == team_id,
            Resource.is_active == True,
        ]
        
        if resource_types:
            conditions.append(Resource.resource_type.in_(list(resource_types)))
        
        if department_ids:
            conditions.append(
                Resource.id.in_(
                    select(ResourceDepartmentAssignment.resource_id).where(
                        ResourceDepartmentAssignment.department_id.in_(list(department_ids))
                    )
                )
            )
        
        if project_id:
            allocation_filter = [
                Allocation.project_id == project_id,
                Allocation.is_active == True,
            ]
            if start_date and end_date:
                allocation_filter.extend([
                    Allocation.start_date <= end_date,
                    Allocation.end_date >= start_date,
                ])
            conditions.append(
                Resource.id.in_(select(Allocation.resource_id).where(and_(*allocation_filter)))
            )
        
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(Resource.first_name).like(pattern),
                    func.lower(Resource.last_name).like(pattern),
                    func.lower(Resource.email).like(pattern),
                    func.lower(Resource.equipment_name).like(pattern),
                )
            )
        
        return conditions
    
    async def list_for_heatmap(
        self,
        team_id: UUID,
        skip: int = 0,
        limit: int = 20,
        resource_types: Optional[Sequence[ResourceType]] = None,
        department_ids: Optional[Sequence[UUID]] = None,
        project_id: Optional[UUID] = None,
        search: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[Resource], int]:
        """
        List active team resources matching the heatmap filters.
        
        Returns:
            The requested page of resources and the total number of matches
        """
        conditions = self._filter_conditions(
            team_id,
            resource_types=resource_types,
            department_ids=department_ids,
            project_id=project_id,
            search=search,
            start_date=start_date,
            end_date=end_date,
        )
        
        query = (
            self._base_query()
            .where(and_(*conditions))
            .order_by(
                Resource.first_name.asc(),
                Resource.last_name.asc(),
                Resource.equipment_name.asc(),
                Resource.id.asc(),
            )
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        resources = list(result.scalars().all())
        
        count_result = await self.session.execute(
            select(func.count()).select_from(Resource).where(and_(*conditions))
        )
        return resources, count_result.scalar_one()
