# transparency/schemas/partner.py
from typing import Optional
from pydantic import BaseModel
from .base import BaseSchema, FormNumber, TimestampMixin

class PartnerForm(BaseModel):
    name: Optional[str] = ""
    logo: Optional[str] = ""
    website: Optional[str] = ""
    amount: FormNumber = 0.0
    project: Optional[str] = ""
    note: Optional[str] = ""
    date: Optional[str] = None
    featured: bool = False

class PartnerBase(BaseSchema):
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    amount: float = 0
    project: Optional[str] = None
    note: Optional[str] = None
    date: Optional[str] = None
    featured: bool = False

class Partner(PartnerBase, TimestampMixin):
    id: str
