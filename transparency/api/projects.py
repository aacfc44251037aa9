# transparency/api/projects.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.project import Project
from ..schemas.project import ProjectDetail, ProjectForm, CompletionForm, SubProjectForm
from ..services.forms import (
    apply_document, completion_data, completion_document, find_entry, project_document,
    remove_entry, replace_entry, sub_project_entry, with_timestamps
)
from ..services.listener import collection_hub
from ..services.views import project_detail
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _get_project(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _save(db: Session, project: Project, action: str) -> dict:
    """Commit a project write, refresh it and push the new projects snapshot"""
    try:
        db.commit()
        db.refresh(project)
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to {action}", extra={
            "project_id": project.id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Failed to {action}: {str(e)}")

    collection_hub.broadcast(db, "projects")
    return project_detail(project)


@router.get("", response_model=List[ProjectDetail])
async def list_projects(completed: Optional[bool] = None, db: Session = Depends(get_db)):
    """List projects, optionally only active or only completed ones"""
    api_logger.info("Listing projects", extra={"completed": completed})

    query = db.query(Project)
    if completed is not None:
        query = query.filter(Project.is_completed == completed)
    projects = query.order_by(Project.created_at.desc()).all()

    api_logger.info(f"Found {len(projects)} projects")
    return [project_detail(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(project_id: str, db: Session = Depends(get_db)):
    api_logger.info("Fetching project", extra={"project_id": project_id})
    return project_detail(_get_project(db, project_id))


@router.post("", response_model=ProjectDetail)
async def create_project(form: ProjectForm, db: Session = Depends(get_db)):
    payload = project_document(form.model_dump(), creating=True)
    api_logger.info("Creating new project", extra={"project_title": payload["title"]})

    project = apply_document(Project(), payload)
    db.add(project)
    detail = _save(db, project, "save project")

    api_logger.info("Project created successfully", extra={"project_id": project.id})
    return detail


@router.put("/{project_id}", response_model=ProjectDetail)
async def update_project(project_id: str, form: ProjectForm, db: Session = Depends(get_db)):
    payload = project_document(form.model_dump(), creating=False)
    api_logger.info("Updating project", extra={"project_id": project_id})

    project = apply_document(_get_project(db, project_id), payload)
    return _save(db, project, "save project")


@router.post("/{project_id}/complete", response_model=ProjectDetail)
async def complete_project(project_id: str, form: CompletionForm, db: Session = Depends(get_db)):
    """Mark a project completed and store its completion story"""
    payload = completion_document(form.model_dump())
    api_logger.info("Completing project", extra={"project_id": project_id})

    project = apply_document(_get_project(db, project_id), payload)
    return _save(db, project, "complete project")


@router.delete("/{project_id}")
async def delete_project(project_id: str, db: Session = Depends(get_db)):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    try:
        project = _get_project(db, project_id)
        db.delete(project)
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete project: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete project: {str(e)}")

    collection_hub.broadcast(db, "projects")
    api_logger.info(f"Successfully deleted project {project_id}")
    return {"success": True}


@router.post("/{project_id}/subprojects", response_model=ProjectDetail)
async def add_sub_project(project_id: str, form: SubProjectForm, db: Session = Depends(get_db)):
    """Append a sub-project; the project becomes a parent"""
    entry = sub_project_entry(form.model_dump())
    project = _get_project(db, project_id)
    api_logger.info("Adding sub-project", extra={
        "project_id": project_id,
        "sub_project_id": entry["id"]
    })

    apply_document(project, with_timestamps({
        "is_parent": True,
        "sub_projects": list(project.sub_projects or []) + [entry],
    }, creating=False))
    return _save(db, project, "add sub-project")


@router.put("/{project_id}/subprojects/{sub_project_id}", response_model=ProjectDetail)
async def update_sub_project(project_id: str, sub_project_id: str, form: SubProjectForm,
                             db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    existing = find_entry(project.sub_projects, sub_project_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Sub-project not found")

    entry = sub_project_entry(form.model_dump(), existing)
    apply_document(project, with_timestamps({
        "sub_projects": replace_entry(project.sub_projects, entry),
    }, creating=False))
    return _save(db, project, "update sub-project")


@router.post("/{project_id}/subprojects/{sub_project_id}/complete", response_model=ProjectDetail)
async def complete_sub_project(project_id: str, sub_project_id: str, form: CompletionForm,
                               db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    entry = find_entry(project.sub_projects, sub_project_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Sub-project not found")

    entry["is_completed"] = True
    entry["completion_data"] = completion_data(form.model_dump())
    apply_document(project, with_timestamps({
        "sub_projects": replace_entry(project.sub_projects, entry),
    }, creating=False))
    return _save(db, project, "complete sub-project")


@router.delete("/{project_id}/subprojects/{sub_project_id}", response_model=ProjectDetail)
async def delete_sub_project(project_id: str, sub_project_id: str, db: Session = Depends(get_db)):
    project = _get_project(db, project_id)
    if find_entry(project.sub_projects, sub_project_id) is None:
        raise HTTPException(status_code=404, detail="Sub-project not found")

    apply_document(project, with_timestamps({
        "sub_projects": remove_entry(project.sub_projects, sub_project_id),
    }, creating=False))
    return _save(db, project, "delete sub-project")
