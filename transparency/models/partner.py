# transparency/models/partner.py
from uuid import uuid4
from sqlalchemy import Column, String, Text, DateTime, Float, Boolean
from sqlalchemy.sql import func
from ..database import Base

class Partner(Base):
    __tablename__ = "partners"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    name = Column(String(255), nullable=False)
    logo = Column(String(1024), nullable=True)
    website = Column(String(1024), nullable=True)
    amount = Column(Float, nullable=False, server_default='0')
    project = Column(String(255), nullable=True)
    note = Column(Text, nullable=True)
    date = Column(String(32), nullable=True)
    featured = Column(Boolean, nullable=False, server_default='0')
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
