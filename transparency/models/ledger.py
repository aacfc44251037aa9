# transparency/models/ledger.py
from uuid import uuid4
from sqlalchemy import Column, String, Text, DateTime, Float
from sqlalchemy.sql import func

from ..database import Base


class Donation(Base):
    __tablename__ = "donations"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    amount = Column(Float, nullable=False, server_default='0')
    donor_email = Column(String(255), nullable=True)
    project_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    amount = Column(Float, nullable=False, server_default='0')
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, server_default='general')
    project = Column(String(255), nullable=True)
    receipt = Column(String(1024), nullable=True)
    date = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
