# transparency/schemas/project.py
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import BaseSchema, FormNumber, TimestampMixin


class Testimonial(BaseModel):
    name: str = ""
    text: str = ""
    role: Optional[str] = ""


class ImpactStats(BaseModel):
    people_helped: int = 0
    items_distributed: int = 0
    custom_metric: str = ""


class CompletionData(BaseModel):
    completed_date: Optional[str] = None
    completion_story: Optional[str] = None
    before_images: List[str] = []
    after_images: List[str] = []
    progress_images: List[str] = []
    testimonials: List[Testimonial] = []
    impact_stats: ImpactStats = Field(default_factory=ImpactStats)


class ImpactStatsForm(BaseModel):
    people_helped: FormNumber = 0.0
    items_distributed: FormNumber = 0.0
    custom_metric: Optional[str] = ""


class CompletionForm(BaseModel):
    """Completion form state; blank rows are dropped before saving"""
    completed_date: Optional[str] = None
    completion_story: Optional[str] = ""
    before_images: List[str] = [""]
    after_images: List[str] = [""]
    progress_images: List[str] = [""]
    testimonials: List[Testimonial] = [Testimonial()]
    impact_stats: ImpactStatsForm = Field(default_factory=ImpactStatsForm)


class SubProject(BaseModel):
    id: str
    title: str
    community: Optional[str] = ""
    description: Optional[str] = ""
    goal: float = 0
    raised: float = 0
    is_completed: bool = False
    completion_data: Optional[CompletionData] = None


class SubProjectForm(BaseModel):
    title: Optional[str] = ""
    community: Optional[str] = ""
    description: Optional[str] = ""
    goal: FormNumber = 0.0
    raised: FormNumber = 0.0
    is_completed: Optional[bool] = None


class ProjectForm(BaseModel):
    """Dashboard project form; required fields are checked before writing"""
    title: Optional[str] = ""
    subtitle: Optional[str] = ""
    tagline: Optional[str] = ""
    description: Optional[str] = ""
    call_to_action: Optional[str] = ""
    category: Optional[str] = "water"
    goal: FormNumber = 0.0
    raised: FormNumber = 0.0
    supporters: FormNumber = 0.0
    image: Optional[str] = ""
    tag: Optional[str] = ""
    is_active: Optional[bool] = None
    is_live: Optional[bool] = None
    is_completed: Optional[bool] = None
    is_parent: Optional[bool] = None


class ProjectBase(BaseSchema):
    title: str
    subtitle: Optional[str] = None
    tagline: Optional[str] = None
    description: str
    call_to_action: Optional[str] = None
    category: str = "water"
    goal: float
    raised: float = 0
    supporters: int = 0
    image: Optional[str] = None
    tag: Optional[str] = None
    is_active: bool = True
    is_live: bool = False
    is_completed: bool = False
    completion_data: Optional[CompletionData] = None
    is_parent: bool = False
    sub_projects: List[SubProject] = []


class Project(ProjectBase, TimestampMixin):
    id: str


class ProgressInfo(BaseModel):
    ratio: float
    percent: float
    display_percent: float


class ProjectDetail(Project):
    progress: ProgressInfo
    fully_funded: bool = False
