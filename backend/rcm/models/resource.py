"""
Resource model: a person or a piece of equipment that can be allocated to work.
"""

from sqlalchemy import Column, String, Boolean, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from rcm.db.base import Base


class ResourceType(str, enum.Enum):
    """Resource type enumeration."""
    PERSONNEL = "personnel"
    EQUIPMENT = "equipment"


class Resource(Base):
    """Allocatable resource owned by a team."""
    
    __tablename__ = "rcm_resources"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    team_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    resource_type = Column(
        SQLEnum(
            ResourceType,
            name="rcm_resource_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        index=True,
    )
    
    # Personnel fields
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    
    # Equipment fields
    equipment_name = Column(String(200), nullable=True)
    
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    
    # Relationships
    department_assignments = relationship(
        "ResourceDepartmentAssignment",
        back_populates="resource",
        cascade="all, delete-orphan",
    )
    availability_records = relationship("Availability", back_populates="resource")
    unavailability_periods = relationship("UnavailabilityPeriod", back_populates="resource")
    allocations = relationship("Allocation", back_populates="resource")
    
    @property
    def display_name(self) -> str:
        """Full name for personnel, equipment name for equipment."""
        if self.resource_type == ResourceType.PERSONNEL:
            return f"{self.first_name or ''} {self.last_name or ''}".strip()
        return self.equipment_name or ""
