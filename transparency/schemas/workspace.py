# transparency/schemas/workspace.py
from typing import List, Optional
from pydantic import BaseModel
from .base import BaseSchema, FormNumber, TimestampMixin

class WorkspaceExpense(BaseModel):
    id: str
    description: str
    amount: float = 0
    date: Optional[str] = None
    note: Optional[str] = None

class ExpenseForm(BaseModel):
    description: Optional[str] = ""
    amount: FormNumber = 0.0
    date: Optional[str] = None
    note: Optional[str] = ""

class WorkspaceForm(BaseModel):
    name: Optional[str] = ""
    logo: Optional[str] = ""
    total_received: FormNumber = 0.0
    date: Optional[str] = None
    note: Optional[str] = ""

class WorkspaceBase(BaseSchema):
    name: str
    logo: Optional[str] = None
    total_received: float = 0
    date: Optional[str] = None
    note: Optional[str] = None
    expenses: List[WorkspaceExpense] = []

class Workspace(WorkspaceBase, TimestampMixin):
    id: str

class WorkspaceDetail(Workspace):
    total_spent: float = 0
    remaining: float = 0
    date_label: str = ""
