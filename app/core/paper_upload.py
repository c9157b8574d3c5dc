"""Paper upload sequence: files to the blob store, then the metadata row."""
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import List, Optional

from app.core.blob_store import BlobStore
from app.core.logging_config import get_logger
from app.core.record_store import PAPERS_TABLE, RecordStore
from app.models.paper import Paper, PaperCreate

logger = get_logger(__name__)

QUESTION_FOLDER = "papers"
SOLUTION_FOLDER = "solutions"


@dataclass
class UploadedFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None


def split_csv(text: Optional[str]) -> List[str]:
    """Split a comma separated form field, dropping blank entries."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def build_object_path(folder: str, filename: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    # Only the final path component of the client supplied name is kept
    name = PurePath(filename.replace("\\", "/")).name or "file"
    return f"{folder}/{int(now.timestamp() * 1000)}_{name}"


def _store_file(blob_store: BlobStore, bucket: str, folder: str, upload: UploadedFile, now: datetime) -> str:
    path = build_object_path(folder, upload.filename, now)
    blob_store.upload(bucket, path, upload.content, upload.content_type)
    return blob_store.get_public_url(bucket, path)


def upload_paper(
    record_store: RecordStore,
    blob_store: BlobStore,
    bucket: str,
    form: PaperCreate,
    question_file: UploadedFile,
    solution_file: Optional[UploadedFile] = None,
    now: Optional[datetime] = None,
) -> Paper:
    """
    Store the paper files and record the paper.

    Args:
        record_store: Table access for the ``papers`` row
        blob_store: Object storage for the files
        bucket: Storage bucket name
        form: Validated upload form metadata
        question_file: The question paper file
        solution_file: Optional solution file
        now: Upload time, defaults to the current UTC time

    Returns:
        The inserted paper

    Raises:
        UploadError: A file upload failed. No row is written in that case.
        QueryError: The metadata insert failed.
    """
    now = now or datetime.now(timezone.utc)

    question_url = _store_file(blob_store, bucket, QUESTION_FOLDER, question_file, now)
    solution_url = None
    if solution_file is not None:
        solution_url = _store_file(blob_store, bucket, SOLUTION_FOLDER, solution_file, now)

    record = form.model_dump(mode="json")
    record.update({
        "question_paper_url": question_url,
        "solution_url": solution_url,
        "upload_date": now.isoformat(),
        "download_count": 0,
        "verified": True,
        "rating": 0,
    })
    row = record_store.insert(PAPERS_TABLE, record)
    logger.info(f"Paper created: {row.get('id')} ({form.subject}, {form.branch}, sem {form.semester})")
    return Paper(**row)
