"""
Question Papers API Endpoints
"""

from fastapi import APIRouter, Depends, Query, UploadFile, File, Form
from pydantic import ValidationError as PydanticValidationError
from typing import List, Optional

from app.core.aggregation import increment_download
from app.core.blob_store import BlobStore
from app.core.catalog import PaperFilters, featured_papers, list_papers
from app.core.dependencies import get_blob_store, get_record_store, get_storage_bucket, require_admission
from app.core.exceptions import ValidationError
from app.core.logging_config import get_logger
from app.core.paper_upload import UploadedFile, split_csv, upload_paper
from app.core.record_store import PAPERS_TABLE, RecordStore
from app.models.admission import AdmissionState
from app.models.paper import (
    BRANCHES, DIFFICULTIES, EXAM_TYPES, SEMESTERS, YEARS, Difficulty, Paper, PaperCreate
)

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[Paper])
async def get_papers(
    search: Optional[str] = Query(None),
    branch: Optional[str] = Query(None),
    semester: Optional[int] = Query(None, ge=1, le=8),
    year: Optional[int] = Query(None),
    exam_type: Optional[str] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    subject: Optional[str] = Query(None),
    solutions_only: bool = Query(False),
    store: RecordStore = Depends(get_record_store)
):
    """List papers with optional filters, newest first"""
    filters = PaperFilters(
        search=search,
        branch=branch,
        semester=semester,
        year=year,
        exam_type=exam_type,
        difficulty=difficulty,
        subject=subject,
        solutions_only=solutions_only,
    )
    return list_papers(store, filters)


@router.get("/featured", response_model=List[Paper])
async def get_featured_papers(
    limit: int = Query(6, ge=1, le=50),
    store: RecordStore = Depends(get_record_store)
):
    """Most downloaded papers"""
    return featured_papers(store, limit)


@router.get("/options")
async def get_paper_options():
    """Choices offered by the browse filters and the upload form"""
    return {
        "branches": BRANCHES,
        "exam_types": EXAM_TYPES,
        "difficulties": DIFFICULTIES,
        "semesters": SEMESTERS,
        "years": YEARS,
    }


@router.post("/upload", response_model=Paper, status_code=201)
async def upload_new_paper(
    title: str = Form(...),
    subject: str = Form(...),
    branch: str = Form(...),
    semester: int = Form(...),
    year: int = Form(...),
    exam_type: str = Form(...),
    difficulty: Difficulty = Form(Difficulty.MEDIUM),
    tags: str = Form(""),
    chapters: str = Form(""),
    question_paper: UploadFile = File(...),
    solution: Optional[UploadFile] = File(None),
    admission: AdmissionState = Depends(require_admission),
    record_store: RecordStore = Depends(get_record_store),
    blob_store: BlobStore = Depends(get_blob_store),
    bucket: str = Depends(get_storage_bucket)
):
    """Upload a question paper with an optional solution (admitted operators only)"""
    try:
        form = PaperCreate(
            title=title,
            subject=subject,
            branch=branch,
            semester=semester,
            year=year,
            exam_type=exam_type,
            difficulty=difficulty,
            tags=split_csv(tags),
            chapters=split_csv(chapters),
        )
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid paper details",
            error_code="INVALID_PAPER",
            details={"errors": e.errors(include_url=False, include_context=False)}
        )

    question_file = UploadedFile(
        filename=question_paper.filename or "question_paper",
        content=await question_paper.read(),
        content_type=question_paper.content_type,
    )
    solution_file = None
    if solution is not None and solution.filename:
        solution_file = UploadedFile(
            filename=solution.filename,
            content=await solution.read(),
            content_type=solution.content_type,
        )

    logger.info(f"Upload by {admission.identifier}: {form.title}")
    return upload_paper(record_store, blob_store, bucket, form, question_file, solution_file)


@router.get("/{paper_id}", response_model=Paper)
async def get_paper(
    paper_id: str,
    store: RecordStore = Depends(get_record_store)
):
    """Get a specific paper"""
    return Paper(**store.get(PAPERS_TABLE, paper_id))


@router.post("/{paper_id}/download", response_model=Paper)
async def record_download(
    paper_id: str,
    store: RecordStore = Depends(get_record_store)
):
    """Count one download of a paper and return it with the new count"""
    paper = increment_download(Paper(**store.get(PAPERS_TABLE, paper_id)))
    row = store.update(PAPERS_TABLE, paper_id, {"download_count": paper.download_count})
    logger.debug(f"Paper {paper_id} downloads now {paper.download_count}")
    return Paper(**row)
