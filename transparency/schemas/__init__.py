# transparency/schemas/__init__.py
from .project import Project, ProjectDetail, ProjectForm, CompletionForm, SubProjectForm
from .partner import Partner, PartnerForm
from .workspace import Workspace, WorkspaceDetail, WorkspaceForm, ExpenseForm
from .ledger import Donation, DonationCreate, Expense, ExpenseCreate, Transaction, LedgerView

__all__ = [
    "Project", "ProjectDetail", "ProjectForm", "CompletionForm", "SubProjectForm",
    "Partner", "PartnerForm",
    "Workspace", "WorkspaceDetail", "WorkspaceForm", "ExpenseForm",
    "Donation", "DonationCreate", "Expense", "ExpenseCreate", "Transaction", "LedgerView"
]
