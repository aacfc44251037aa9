# transparency/models/workspace.py
from uuid import uuid4
from sqlalchemy import Column, String, Text, DateTime, Float, JSON
from sqlalchemy.sql import func
from ..database import Base

class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    name = Column(String(255), nullable=False)
    logo = Column(String(1024), nullable=True)
    total_received = Column(Float, nullable=False, server_default='0')
    date = Column(String(32), nullable=True)
    note = Column(Text, nullable=True)
    # Expenses live inside the workspace row and go away with it
    expenses = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
