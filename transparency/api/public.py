# transparency/api/public.py
from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.ledger import LedgerView
from ..schemas.transparency import CompletedProjectsView, GivingCircleView, PartnersView
from ..services import views
from ..services.ledger import export_csv, export_filename
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/completed-projects", response_model=CompletedProjectsView)
async def completed_projects(db: Session = Depends(get_db)):
    """Completed projects and sub-projects, most recently completed first"""
    return views.completed_projects_view(db)


@router.get("/partners", response_model=PartnersView)
async def partners(db: Session = Depends(get_db)):
    """Founding partners followed by admin-added ones, plus recorded contributions"""
    return views.partners_view(db)


@router.get("/giving-circle", response_model=GivingCircleView)
async def giving_circle(db: Session = Depends(get_db)):
    return views.giving_circle_view(db)


@router.get("/ledger", response_model=LedgerView)
async def ledger(type: Literal["all", "income", "expense"] = "all", search: str = "",
                 db: Session = Depends(get_db)):
    api_logger.info("Building ledger", extra={"filter": type, "search": search})
    return views.ledger_view(db, type, search)


@router.get("/ledger/export")
async def export_ledger(db: Session = Depends(get_db)):
    """Download every ledger transaction as CSV"""
    transactions = views.ledger_transactions(db)
    filename = export_filename()
    api_logger.info("Exporting ledger", extra={
        "transaction_count": len(transactions),
        "export_filename": filename
    })
    return Response(
        content=export_csv(transactions),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
