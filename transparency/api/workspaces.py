# transparency/api/workspaces.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.workspace import Workspace
from ..schemas.workspace import WorkspaceDetail, WorkspaceForm, ExpenseForm
from ..services.forms import (
    apply_document, expense_entry, find_entry, remove_entry, replace_entry,
    with_timestamps, workspace_document
)
from ..services.listener import collection_hub
from ..services.views import workspace_detail
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/workspaces", tags=["workspaces"])


def _get_workspace(db: Session, workspace_id: str) -> Workspace:
    workspace = db.query(Workspace).filter(Workspace.id == workspace_id).first()
    if not workspace:
        api_logger.warning("Workspace not found", extra={"workspace_id": workspace_id})
        raise HTTPException(status_code=404, detail="Workspace not found")
    return workspace


def _save(db: Session, workspace: Workspace) -> dict:
    try:
        db.commit()
        db.refresh(workspace)
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to save workspace", extra={
            "workspace_id": workspace.id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Failed: {str(e)}")

    collection_hub.broadcast(db, "workspaces")
    return workspace_detail(workspace)


@router.get("", response_model=List[WorkspaceDetail])
async def list_workspaces(db: Session = Depends(get_db)):
    """List giving-circle workspaces with their spending"""
    workspaces = db.query(Workspace).order_by(Workspace.created_at.desc()).all()
    api_logger.info(f"Found {len(workspaces)} workspaces")
    return [workspace_detail(w) for w in workspaces]


@router.get("/{workspace_id}", response_model=WorkspaceDetail)
async def get_workspace(workspace_id: str, db: Session = Depends(get_db)):
    return workspace_detail(_get_workspace(db, workspace_id))


@router.post("", response_model=WorkspaceDetail)
async def create_workspace(form: WorkspaceForm, db: Session = Depends(get_db)):
    payload = workspace_document(form.model_dump(), creating=True)
    api_logger.info("Creating new workspace", extra={"workspace_name": payload["name"]})

    workspace = apply_document(Workspace(), payload)
    db.add(workspace)
    return _save(db, workspace)


@router.put("/{workspace_id}", response_model=WorkspaceDetail)
async def update_workspace(workspace_id: str, form: WorkspaceForm, db: Session = Depends(get_db)):
    payload = workspace_document(form.model_dump(), creating=False)
    api_logger.info("Updating workspace", extra={"workspace_id": workspace_id})

    workspace = apply_document(_get_workspace(db, workspace_id), payload)
    return _save(db, workspace)


@router.delete("/{workspace_id}")
async def delete_workspace(workspace_id: str, db: Session = Depends(get_db)):
    """Delete a workspace together with its embedded expenses"""
    api_logger.info("Deleting workspace", extra={"workspace_id": workspace_id})

    try:
        workspace = _get_workspace(db, workspace_id)
        expense_count = len(workspace.expenses or [])
        db.delete(workspace)
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete workspace: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed: {str(e)}")

    collection_hub.broadcast(db, "workspaces")
    api_logger.info("Workspace deleted", extra={
        "workspace_id": workspace_id,
        "expense_count": expense_count
    })
    return {"success": True}


@router.post("/{workspace_id}/expenses", response_model=WorkspaceDetail)
async def add_expense(workspace_id: str, form: ExpenseForm, db: Session = Depends(get_db)):
    entry = expense_entry(form.model_dump())
    workspace = _get_workspace(db, workspace_id)
    api_logger.info("Adding workspace expense", extra={
        "workspace_id": workspace_id,
        "expense_id": entry["id"]
    })

    apply_document(workspace, with_timestamps({
        "expenses": list(workspace.expenses or []) + [entry],
    }, creating=False))
    return _save(db, workspace)


@router.put("/{workspace_id}/expenses/{expense_id}", response_model=WorkspaceDetail)
async def update_expense(workspace_id: str, expense_id: str, form: ExpenseForm, db: Session = Depends(get_db)):
    workspace = _get_workspace(db, workspace_id)
    existing = find_entry(workspace.expenses, expense_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Expense not found")

    entry = expense_entry(form.model_dump(), existing)
    apply_document(workspace, with_timestamps({
        "expenses": replace_entry(workspace.expenses, entry),
    }, creating=False))
    return _save(db, workspace)


@router.delete("/{workspace_id}/expenses/{expense_id}", response_model=WorkspaceDetail)
async def delete_expense(workspace_id: str, expense_id: str, db: Session = Depends(get_db)):
    workspace = _get_workspace(db, workspace_id)
    if find_entry(workspace.expenses, expense_id) is None:
        raise HTTPException(status_code=404, detail="Expense not found")

    apply_document(workspace, with_timestamps({
        "expenses": remove_entry(workspace.expenses, expense_id),
    }, creating=False))
    return _save(db, workspace)
