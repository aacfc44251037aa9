# transparency/api/partners.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.partner import Partner
from ..schemas.partner import Partner as PartnerSchema, PartnerForm
from ..services.forms import apply_document, partner_document
from ..services.listener import collection_hub
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/partners", tags=["partners"])


def _get_partner(db: Session, partner_id: str) -> Partner:
    partner = db.query(Partner).filter(Partner.id == partner_id).first()
    if not partner:
        api_logger.warning("Partner not found", extra={"partner_id": partner_id})
        raise HTTPException(status_code=404, detail="Partner not found")
    return partner


@router.get("", response_model=List[PartnerSchema])
async def list_partners(db: Session = Depends(get_db)):
    """List partners, newest first"""
    partners = db.query(Partner).order_by(Partner.created_at.desc()).all()
    api_logger.info(f"Found {len(partners)} partners")
    return partners


@router.post("", response_model=PartnerSchema)
async def create_partner(form: PartnerForm, db: Session = Depends(get_db)):
    payload = partner_document(form.model_dump(), creating=True)
    api_logger.info("Creating new partner", extra={"partner_name": payload["name"]})

    try:
        partner = apply_document(Partner(), payload)
        db.add(partner)
        db.commit()
        db.refresh(partner)
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to create partner", extra={
            "partner_name": payload["name"],
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Failed to save: {str(e)}")

    collection_hub.broadcast(db, "partners")
    api_logger.info("Partner created successfully", extra={"partner_id": partner.id})
    return partner


@router.put("/{partner_id}", response_model=PartnerSchema)
async def update_partner(partner_id: str, form: PartnerForm, db: Session = Depends(get_db)):
    payload = partner_document(form.model_dump(), creating=False)
    api_logger.info("Updating partner", extra={"partner_id": partner_id})

    try:
        partner = apply_document(_get_partner(db, partner_id), payload)
        db.commit()
        db.refresh(partner)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to update partner", extra={
            "partner_id": partner_id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail=f"Failed to save: {str(e)}")

    collection_hub.broadcast(db, "partners")
    return partner


@router.delete("/{partner_id}")
async def delete_partner(partner_id: str, db: Session = Depends(get_db)):
    api_logger.info("Deleting partner", extra={"partner_id": partner_id})

    try:
        db.delete(_get_partner(db, partner_id))
        db.commit()
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete partner: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete: {str(e)}")

    collection_hub.broadcast(db, "partners")
    return {"success": True}
