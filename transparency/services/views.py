# transparency/services/views.py
from dataclasses import asdict
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from .flattener import flatten_completed
from .ledger import build_transactions, filter_transactions, project_funds, summarize
from .merger import merge_seeded
from .rollup import progress, is_fully_funded, rollup, workspace_balance
from ..models import Project, Partner, Workspace, Donation, Expense
from ..schemas.partner import Partner as PartnerSchema
from ..schemas.project import Project as ProjectSchema
from ..schemas.workspace import Workspace as WorkspaceSchema
from ..seed import FOUNDING_PARTNERS
from ..utils.formatting import format_currency, format_date, format_month_year
from ..utils.logging import service_logger


def project_detail(project: Project) -> Dict[str, Any]:
    """Project as shown on the dashboard, with its funding progress"""
    data = ProjectSchema.model_validate(project).model_dump()
    data["progress"] = asdict(progress(project.raised, project.goal))
    data["fully_funded"] = is_fully_funded(project)
    return data


def workspace_detail(workspace: Workspace) -> Dict[str, Any]:
    data = WorkspaceSchema.model_validate(workspace).model_dump()
    balance = workspace_balance(workspace)
    data["total_spent"] = balance.spent
    data["remaining"] = balance.remaining
    data["date_label"] = format_month_year(data.get("date") or data.get("created_at"))
    return data


def completed_projects_view(db: Session) -> Dict[str, Any]:
    projects = db.query(Project).filter(
        (Project.is_completed == True) | (Project.is_parent == True)  # noqa: E712
    ).all()
    items = flatten_completed(ProjectSchema.model_validate(p).model_dump() for p in projects)
    for item in items:
        item["completed_date_label"] = format_date((item.get("completion_data") or {}).get("completed_date"))
    people_helped = sum(
        ((item.get("completion_data") or {}).get("impact_stats") or {}).get("people_helped") or 0
        for item in items
    )
    total_raised = rollup(items, "raised").total
    service_logger.info("Built completed projects view", extra={"item_count": len(items)})
    return {
        "projects": items,
        "total_raised": total_raised,
        "total_raised_label": format_currency(total_raised),
        "total_supporters": int(rollup(items, "supporters").total),
        "total_people_helped": people_helped,
    }


def partners_view(db: Session) -> Dict[str, Any]:
    partners = [
        PartnerSchema.model_validate(p).model_dump()
        for p in db.query(Partner).order_by(Partner.created_at.desc()).all()
    ]
    merged = merge_seeded(FOUNDING_PARTNERS, partners)
    contributing = [p for p in partners if (p.get("amount") or 0) > 0]
    total_contributed = rollup(contributing, "amount").total
    return {
        "partners": merged,
        "founding": FOUNDING_PARTNERS,
        "additional": merged[len(FOUNDING_PARTNERS):],
        "contributing": contributing,
        "total_contributed": total_contributed,
        "total_contributed_label": format_currency(total_contributed),
    }


def giving_circle_view(db: Session) -> Dict[str, Any]:
    workspaces = db.query(Workspace).order_by(Workspace.created_at.desc()).all()
    total_received = rollup(workspaces, "total_received").total
    return {
        "workspaces": [workspace_detail(w) for w in workspaces],
        "total_received": total_received,
        "total_received_label": format_currency(total_received),
    }


def ledger_transactions(db: Session) -> List[Dict[str, Any]]:
    donations = db.query(Donation).order_by(Donation.created_at.desc()).all()
    expenses = db.query(Expense).order_by(Expense.created_at.desc()).all()
    return build_transactions(donations, expenses)


def ledger_view(db: Session, kind: str = "all", search: str = "") -> Dict[str, Any]:
    """Ledger page: summary over all transactions, listing filtered by type and search"""
    transactions = ledger_transactions(db)
    active = db.query(Project).filter(Project.is_active == True).order_by(Project.created_at.desc()).all()  # noqa: E712
    funds = project_funds(active)
    return {
        "transactions": filter_transactions(transactions, kind, search),
        **summarize(transactions),
        "projects": funds,
        "total_project_funds": rollup(funds, "raised").total,
    }
