# transparency/api/ledger.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.ledger import Donation, Expense
from ..schemas.ledger import Donation as DonationSchema, DonationCreate, Expense as ExpenseSchema, ExpenseCreate
from ..services.listener import collection_hub
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/ledger", tags=["ledger"])


@router.get("/donations", response_model=List[DonationSchema])
async def list_donations(db: Session = Depends(get_db)):
    return db.query(Donation).order_by(Donation.created_at.desc()).all()


@router.post("/donations", response_model=DonationSchema)
async def record_donation(donation: DonationCreate, db: Session = Depends(get_db)):
    """Record an income entry"""
    api_logger.info("Recording donation", extra={
        "amount": donation.amount,
        "project_id": donation.project_id
    })
    try:
        db_donation = Donation(**donation.model_dump())
        db.add(db_donation)
        db.commit()
        db.refresh(db_donation)
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to record donation", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail=f"Failed to record donation: {str(e)}")

    collection_hub.broadcast(db, "donations")
    return db_donation


@router.get("/expenses", response_model=List[ExpenseSchema])
async def list_expenses(db: Session = Depends(get_db)):
    return db.query(Expense).order_by(Expense.created_at.desc()).all()


@router.post("/expenses", response_model=ExpenseSchema)
async def record_expense(expense: ExpenseCreate, db: Session = Depends(get_db)):
    api_logger.info("Recording expense", extra={
        "amount": expense.amount,
        "category": expense.category
    })
    try:
        db_expense = Expense(**expense.model_dump())
        db.add(db_expense)
        db.commit()
        db.refresh(db_expense)
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to record expense", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail=f"Failed to record expense: {str(e)}")

    collection_hub.broadcast(db, "expenses")
    return db_expense


@router.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    api_logger.info("Deleting expense", extra={"expense_id": expense_id})
    try:
        expense = db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise HTTPException(status_code=404, detail="Expense not found")
        db.delete(expense)
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete expense: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete expense: {str(e)}")

    collection_hub.broadcast(db, "expenses")
    return {"success": True}
