"""
Availability and unavailability models.

An availability record states a resource's working capacity from
``effective_from`` (inclusive) until ``effective_to`` (inclusive, NULL means
open-ended). Capacity changes insert a new record rather than editing history.
"""

from sqlalchemy import Column, Date, Numeric, Text, Uuid, ForeignKey, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import enum

from rcm.db.base import Base


class UnavailabilityType(str, enum.Enum):
    """Reason a resource is unavailable."""
    PTO = "pto"
    HOLIDAY = "holiday"
    SICK_LEAVE = "sick_leave"
    TRAINING = "training"
    MAINTENANCE = "maintenance"
    OTHER = "other"


class Availability(Base):
    """Working capacity of a resource over a validity interval."""
    
    __tablename__ = "rcm_availability"
    __table_args__ = (
        CheckConstraint(
            "effective_to IS NULL OR effective_to >= effective_from",
            name="rcm_availability_date_range_check",
        ),
    )
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    resource_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_resources.id", ondelete="CASCADE"), nullable=False, index=True)
    effective_from = Column(Date, nullable=False, index=True)
    effective_to = Column(Date, nullable=True)
    hours_per_day = Column(Numeric(5, 2), nullable=False)
    days_per_week = Column(Numeric(3, 1), nullable=False)
    total_hours_per_week = Column(Numeric(5, 2), nullable=False)  # stored separately for overrides
    
    # Relationships
    resource = relationship("Resource", back_populates="availability_records")


class UnavailabilityPeriod(Base):
    """Interval during which a resource cannot work."""
    
    __tablename__ = "rcm_unavailability_periods"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="rcm_unavailability_date_range_check"),
    )
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    resource_id = Column(Uuid(as_uuid=True), ForeignKey("rcm_resources.id", ondelete="CASCADE"), nullable=False, index=True)
    unavailability_type = Column(
        SQLEnum(
            UnavailabilityType,
            name="rcm_unavailability_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)
    
    # Relationships
    resource = relationship("Resource", back_populates="unavailability_periods")
