"""
Question Paper Models for the MU Papers Portal
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum


BRANCHES = [
    "Computer Engineering",
    "Information Technology",
    "Electronics & Telecommunication",
    "Electronics Engineering",
    "Mechanical Engineering",
    "Civil Engineering",
    "Chemical Engineering",
    "Textile Engineering",
    "Production Engineering",
    "Instrumentation Engineering",
]

EXAM_TYPES = [
    "Internal Assessment",
    "External",
    "Practical",
    "Oral",
    "Project",
    "Viva",
]

SEMESTERS = [1, 2, 3, 4, 5, 6, 7, 8]

YEARS = [2024, 2023, 2022, 2021, 2020, 2019, 2018]


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


DIFFICULTIES = [d.value for d in Difficulty]


class PaperCreate(BaseModel):
    """Metadata collected by the upload form."""
    title: str = Field(..., min_length=1, max_length=200)
    subject: str = Field(..., min_length=1, max_length=100)
    branch: str
    semester: int = Field(..., ge=1, le=8)
    year: int = Field(..., ge=2000, le=2100)
    exam_type: str
    difficulty: Difficulty = Difficulty.MEDIUM
    tags: List[str] = Field(default_factory=list)
    chapters: List[str] = Field(default_factory=list)

    @field_validator('branch')
    @classmethod
    def validate_branch(cls, v: str) -> str:
        if v not in BRANCHES:
            raise ValueError(f"Unknown branch: {v}")
        return v

    @field_validator('exam_type')
    @classmethod
    def validate_exam_type(cls, v: str) -> str:
        if v not in EXAM_TYPES:
            raise ValueError(f"Unknown exam type: {v}")
        return v


class Paper(BaseModel):
    id: str
    title: str
    subject: str
    branch: str
    semester: int = Field(..., ge=1, le=8)
    year: int
    exam_type: str
    question_paper_url: str
    solution_url: Optional[str] = None
    upload_date: datetime
    download_count: int = Field(0, ge=0)
    tags: List[str] = Field(default_factory=list)
    chapters: List[str] = Field(default_factory=list)
    verified: bool = False
    difficulty: Difficulty = Difficulty.MEDIUM
    rating: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('tags', 'chapters', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return v or []
