# transparency/services/snapshots.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from .listener import collection_hub
from ..models import Project, Partner, Workspace, Donation, Expense
from ..schemas.project import Project as ProjectSchema
from ..schemas.partner import Partner as PartnerSchema
from ..schemas.workspace import Workspace as WorkspaceSchema
from ..schemas.ledger import Donation as DonationSchema, Expense as ExpenseSchema

# collection name -> (model, response schema)
COLLECTIONS = {
    "projects": (Project, ProjectSchema),
    "partners": (Partner, PartnerSchema),
    "workspaces": (Workspace, WorkspaceSchema),
    "donations": (Donation, DonationSchema),
    "expenses": (Expense, ExpenseSchema),
}


def make_loader(model, schema):
    def load(db: Session) -> List[Dict[str, Any]]:
        rows = db.query(model).order_by(model.created_at.desc()).all()
        return [schema.model_validate(row).model_dump(mode="json") for row in rows]
    return load


for _name, (_model, _schema) in COLLECTIONS.items():
    collection_hub.register(_name, make_loader(_model, _schema))
