# transparency/schemas/ledger.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .base import BaseSchema
from .project import ProgressInfo


class DonationBase(BaseSchema):
    amount: float = 0
    donor_email: Optional[str] = None
    project_id: Optional[str] = None


class DonationCreate(DonationBase):
    amount: float = Field(gt=0)


class Donation(DonationBase):
    id: str
    created_at: Optional[datetime] = None


class ExpenseBase(BaseSchema):
    amount: float = 0
    description: str
    category: str = "general"
    project: Optional[str] = None
    receipt: Optional[str] = None
    date: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    amount: float = Field(gt=0)
    description: str = Field(min_length=1)


class Expense(ExpenseBase):
    id: str
    created_at: Optional[datetime] = None


class Transaction(BaseModel):
    id: str
    date: str
    type: Literal["income", "expense"]
    category: str
    description: str
    amount: float
    project: str
    receipt: Optional[str] = None
    payment_method: Optional[str] = None
    donor_email: Optional[str] = None
    date_label: str = ""
    amount_label: str = ""


class ProjectFunds(BaseModel):
    id: str
    title: str
    category: str
    raised: float
    goal: float
    progress: ProgressInfo


class LedgerView(BaseModel):
    transactions: List[Transaction]
    total_income: float
    income_count: int
    total_expenses: float
    expense_count: int
    projects: List[ProjectFunds]
    total_project_funds: float
