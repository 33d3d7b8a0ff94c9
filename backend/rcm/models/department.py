"""
Department models and the resource-to-department assignment table.
"""

from sqlalchemy import Column, String, Boolean, Text, Uuid, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from rcm.db.base import Base


class Department(Base):
    """Organisational department, optionally nested under a parent."""
    
    __tablename__ = "rcm_departments"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    team_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    parent_dept_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_departments.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class ResourceDepartmentAssignment(Base):
    """Membership of a resource in a department."""
    
    __tablename__ = "rcm_resource_department_assignments"
    __table_args__ = (
        UniqueConstraint("resource_id", "department_id", name="rcm_resource_dept_unique"),
    )
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    resource_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_resources.id", ondelete="CASCADE"), nullable=False, index=True)
    department_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_departments.id", ondelete="CASCADE"), nullable=False, index=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    resource = relationship("Resource", back_populates="department_assignments")
    department = relationship("Department")
