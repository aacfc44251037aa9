# transparency/models/project.py
from uuid import uuid4
from sqlalchemy import Column, String, Text, DateTime, Float, Integer, Boolean, JSON
from sqlalchemy.sql import func
from ..database import Base

class Project(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    tagline = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    call_to_action = Column(String(255), nullable=True)
    category = Column(String(100), nullable=False, server_default='water')
    goal = Column(Float, nullable=False)
    raised = Column(Float, nullable=False, server_default='0')
    supporters = Column(Integer, nullable=False, server_default='0')
    image = Column(String(1024), nullable=True)
    tag = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, server_default='1')
    is_live = Column(Boolean, nullable=False, server_default='0')
    is_completed = Column(Boolean, nullable=False, server_default='0')
    completion_data = Column(JSON, nullable=True)
    # Embedded children, replaced whole on every write
    is_parent = Column(Boolean, nullable=False, server_default='0')
    sub_projects = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
