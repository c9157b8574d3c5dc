from pydantic import BaseModel, Field
from typing import List


class SubjectShare(BaseModel):
    subject: str
    downloads: int
    percentage: float


class BranchCount(BaseModel):
    branch: str
    papers: int


class DerivedStats(BaseModel):
    """Dashboard summary, recomputed on every load and never stored."""
    total_papers: int = 0
    total_downloads: int = 0
    per_subject: List[SubjectShare] = Field(default_factory=list)
    per_branch: List[BranchCount] = Field(default_factory=list)
    total_attempts: int = 0
    active_students: int = 0
    total_subjects: int = 0
    total_mock_tests: int = 0
    recent_uploads: int = 0
