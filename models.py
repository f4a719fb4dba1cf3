from pydantic import BaseModel
from typing import Optional, List


class ClassIn(BaseModel):
    name: str = ""
    period: Optional[int] = None
    teacher: Optional[str] = None
    weight: Optional[float] = None


class ClassUpdate(BaseModel):
    name: Optional[str] = None
    period: Optional[int] = None
    teacher: Optional[str] = None
    weight: Optional[float] = None


class GradeIn(BaseModel):
    title: str = ""
    points_earned: Optional[float] = None
    points_possible: Optional[float] = None
    category: Optional[str] = None
    due_date: Optional[str] = None  # ISO date, e.g. "2025-09-14"


class GradeUpdate(BaseModel):
    title: Optional[str] = None
    points_earned: Optional[float] = None
    points_possible: Optional[float] = None
    category: Optional[str] = None
    due_date: Optional[str] = None


class CategoryIn(BaseModel):
    name: str = ""
    weight_percent: Optional[float] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    weight_percent: Optional[float] = None


class CategoryRowOut(BaseModel):
    id: Optional[str] = None
    name: str
    weight_percent: float
    earned: float
    possible: float
    percent: Optional[float] = None  # None while the category has no possible points


class SummaryResponse(BaseModel):
    ok: bool = True
    overallPercent: Optional[float] = None
    categories: List[CategoryRowOut] = []
    sumWeights: float = 0.0


class ProfileUpdate(BaseModel):
    displayName: str = ""
