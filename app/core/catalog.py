"""Paper gallery filtering.

Equality filters go to the record store; free-text search and the
solutions-only switch run over the fetched rows.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from app.core.record_store import PAPERS_TABLE, RecordStore
from app.models.paper import Difficulty, Paper

ALL = "ALL"


class PaperFilters(BaseModel):
    search: Optional[str] = None
    branch: Optional[str] = None
    semester: Optional[int] = None
    year: Optional[int] = None
    exam_type: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    subject: Optional[str] = None
    solutions_only: bool = False


def is_set(value) -> bool:
    """False for empty values and the "ALL" choice, which mean "no filter"."""
    return value is not None and value != "" and value != ALL


def store_filters(filters: PaperFilters) -> Dict[str, Any]:
    """Equality predicates understood by the record store."""
    predicates = {}
    for column in ("branch", "semester", "year", "exam_type", "subject"):
        value = getattr(filters, column)
        if is_set(value):
            predicates[column] = value
    if filters.difficulty is not None:
        predicates["difficulty"] = filters.difficulty.value
    return predicates


def matches_search(paper: Paper, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = [paper.title, paper.subject, *paper.tags, *paper.chapters]
    return any(needle in text.lower() for text in haystack)


def apply_filters(papers: List[Paper], filters: PaperFilters) -> List[Paper]:
    result = papers
    if filters.search:
        result = [p for p in result if matches_search(p, filters.search)]
    if filters.solutions_only:
        result = [p for p in result if p.solution_url]
    return result


def list_papers(store: RecordStore, filters: PaperFilters) -> List[Paper]:
    rows = store.select(PAPERS_TABLE, store_filters(filters), order_by="upload_date", desc=True)
    return apply_filters([Paper(**row) for row in rows], filters)


def featured_papers(store: RecordStore, limit: int = 6) -> List[Paper]:
    """Most downloaded papers first."""
    rows = store.select(PAPERS_TABLE, order_by="download_count", desc=True, limit=limit)
    return [Paper(**row) for row in rows]
