"""
Project model (read-only from the capacity service's point of view).
"""

from sqlalchemy import Column, String, Uuid
import uuid

from rcm.db.base import Base


class Project(Base):
    """Project that resources are allocated to."""
    
    __tablename__ = "projects"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    team_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color_code = Column(String(16), nullable=True)
