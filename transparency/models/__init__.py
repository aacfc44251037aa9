# transparency/models/__init__.py
from ..database import Base
from .project import Project
from .partner import Partner
from .workspace import Workspace
from .ledger import Donation, Expense

__all__ = [
    "Base",
    "Project",
    "Partner",
    "Workspace",
    "Donation",
    "Expense"
]
