"""
Allocation Pydantic schemas for capacity read endpoints.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date
from uuid import UUID


class AllocationResponse(BaseModel):
    """Allocation as stored."""
    id: UUID
    resource_id: UUID
    project_id: UUID
    start_date: date
    end_date: date
    allocation_percent: float
    is_active: bool
    notes: Optional[str] = None
    
    class Config:
        from_attributes = True


class AllocationOverlapResponse(BaseModel):
    """Result of checking a proposed allocation against existing ones."""
    has_overlap: bool
    total_allocation_percent: float
    overlapping_allocations: List[AllocationResponse] = []


class AllocationTotalResponse(BaseModel):
    """Summed allocation percent for a resource over a range."""
    resource_id: UUID
    total_allocation_percent: float
    allocations: List[AllocationResponse] = []
