"""
Allocation model: a percentage commitment of a resource to a project.
"""

from sqlalchemy import Column, Date, Numeric, Boolean, Text, Uuid, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
import uuid

from rcm.db.base import Base


class Allocation(Base):
    """Allocation of a resource to a project over an inclusive date range."""
    
    __tablename__ = "rcm_allocations"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="rcm_allocations_date_range_check"),
        CheckConstraint("allocation_percent >= 0", name="rcm_allocations_percent_check"),
    )
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    resource_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_resources.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Uuid(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    allocation_percent = Column(Numeric(6, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    
    # Relationships
    resource = relationship("Resource", back_populates="allocations")
    project = relationship("Project")
