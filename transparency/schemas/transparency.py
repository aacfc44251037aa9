# transparency/schemas/transparency.py
from typing import List, Optional

from pydantic import BaseModel

from .partner import Partner
from .project import CompletionData
from .workspace import WorkspaceDetail


class CompletedItem(BaseModel):
    id: Optional[str] = None
    title: str
    subtitle: Optional[str] = None
    description: str = ""
    category: Optional[str] = None
    image: Optional[str] = None
    goal: float = 0
    raised: float = 0
    supporters: Optional[int] = 0
    completion_data: Optional[CompletionData] = None
    completed_date_label: str = ""
    parent_id: Optional[str] = None
    parent_title: Optional[str] = None
    community: Optional[str] = None


class CompletedProjectsView(BaseModel):
    projects: List[CompletedItem]
    total_raised: float
    total_raised_label: str
    total_supporters: int
    total_people_helped: int


class SeedPartner(BaseModel):
    id: str
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    featured: bool = True


class DisplayPartner(BaseModel):
    """A founding or admin-added partner in the merged display list"""
    id: Optional[str] = None
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    amount: float = 0
    featured: bool = False


class PartnersView(BaseModel):
    partners: List[DisplayPartner]
    founding: List[SeedPartner]
    additional: List[Partner]
    contributing: List[Partner]
    total_contributed: float
    total_contributed_label: str


class GivingCircleView(BaseModel):
    workspaces: List[WorkspaceDetail]
    total_received: float
    total_received_label: str
