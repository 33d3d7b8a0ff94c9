"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from rcm.models.resource import Resource, ResourceType
from rcm.models.department import Department, ResourceDepartmentAssignment
from rcm.models.availability import Availability, UnavailabilityPeriod, UnavailabilityType
from rcm.models.allocation import Allocation
from rcm.models.project import Project

__all__ = [
    "Resource",
    "ResourceType",
    "Department",
    "ResourceDepartmentAssignment",
    "Availability",
    "UnavailabilityPeriod",
    "UnavailabilityType",
    "Allocation",
    "Project",
]
