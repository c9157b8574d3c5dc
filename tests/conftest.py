"""
MU Papers Portal - Test Configuration and Fixtures
"""
import os
from contextlib import AsyncExitStack
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ.setdefault('SUPABASE_URL', 'https://test-project.supabase.co')
os.environ.setdefault('SUPABASE_KEY', 'test-anon-key')
os.environ.setdefault('DEBUG', 'false')

from main import app
from app.core.admission import AdmissionStateStore
from app.core.dependencies import (
    get_admission_dir,
    get_blob_store,
    get_record_store,
    get_storage_bucket,
)
from app.core.exceptions import NotFoundError, QueryError, UploadError

PROFILE_COOKIE = "mu_client_profile"


class FakeRecordStore:
    """In-memory stand-in for the Supabase backed RecordStore."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_with: Optional[str] = None

    def _check(self):
        if self.fail_with:
            raise QueryError(self.fail_with, error_code="QUERY_FAILED")

    def _rows(self, table, filters):
        rows = self.tables.get(table, [])
        return [r for r in rows if all(r.get(k) == v for k, v in (filters or {}).items())]

    def select(self, table, filters=None, order_by=None, desc=False, limit=None):
        self._check()
        rows = self._rows(table, filters)
        if order_by:
            rows = sorted(rows, key=lambda r: r.get(order_by), reverse=desc)
        if limit is not None:
            rows = rows[:limit]
        return deepcopy(rows)

    def get(self, table, row_id):
        rows = self.select(table, {"id": row_id}, limit=1)
        if not rows:
            raise NotFoundError(f"No row {row_id} in {table}", error_code="NOT_FOUND")
        return rows[0]

    def count(self, table, filters=None):
        self._check()
        return len(self._rows(table, filters))

    def update(self, table, row_id, values):
        self._check()
        for row in self.tables.get(table, []):
            if row.get("id") == row_id:
                row.update(values)
                return deepcopy(row)
        raise NotFoundError(f"No row {row_id} in {table}", error_code="NOT_FOUND")

    def insert(self, table, values):
        self._check()
        row = {"id": str(uuid4()), **deepcopy(values)}
        self.tables.setdefault(table, []).append(row)
        return deepcopy(row)


class FakeBlobStore:
    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.fail_on: Optional[str] = None

    def upload(self, bucket, path, data, content_type=None):
        if self.fail_on and path.startswith(self.fail_on):
            raise UploadError(f"Failed to upload {path}: quota exceeded", error_code="UPLOAD_FAILED")
        self.objects[f"{bucket}/{path}"] = data
        return path

    def get_public_url(self, bucket, path):
        return f"https://test-project.supabase.co/storage/v1/object/public/{bucket}/{path}"


def make_paper_row(**overrides) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "title": "Data Structures - External 2023",
        "subject": "DSA",
        "branch": "Computer Engineering",
        "semester": 3,
        "year": 2023,
        "exam_type": "External",
        "question_paper_url": "https://test-project.supabase.co/storage/v1/object/public/papers/papers/1_dsa.pdf",
        "solution_url": None,
        "upload_date": datetime(2024, 5, 1, tzinfo=timezone.utc).isoformat(),
        "download_count": 0,
        "tags": ["trees", "graphs"],
        "chapters": ["Trees"],
        "verified": True,
        "difficulty": "Medium",
        "rating": 4.5,
    }
    row.update(overrides)
    return row


def make_mock_test_row(**overrides) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "title": "Database Management Systems - Unit Test",
        "subject": "DBMS",
        "branch": "Information Technology",
        "semester": 4,
        "questions": [
            {
                "id": "q1",
                "question": "Which normal form removes transitive dependencies?",
                "type": "MCQ",
                "options": ["1NF", "2NF", "3NF", "BCNF"],
                "correct_answer": "3NF",
                "explanation": "3NF forbids non-key attributes depending on other non-key attributes.",
                "marks": 2,
                "chapter": "Normalization",
            },
            {
                "id": "q2",
                "question": "Explain two-phase locking.",
                "type": "LONG",
                "correct_answer": "Growing and shrinking phases of lock acquisition.",
                "marks": 8,
                "chapter": "Transactions",
            },
        ],
        "duration": 60,
        "total_marks": 10,
        "created_date": datetime(2024, 4, 1, tzinfo=timezone.utc).isoformat(),
        "attempt_count": 0,
        "difficulty": "Hard",
    }
    row.update(overrides)
    return row


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def admission_store(tmp_path) -> AdmissionStateStore:
    return AdmissionStateStore(tmp_path / "admission.json")


@pytest.fixture
def admission_dir(tmp_path):
    return tmp_path / "profiles"


def profile_store(client: AsyncClient, admission_dir) -> AdmissionStateStore:
    """Admission store of the profile whose cookie ``client`` holds."""
    return AdmissionStateStore.for_profile(admission_dir, client.cookies.get(PROFILE_COOKIE))


@pytest.fixture
async def client_factory(record_store, blob_store, admission_dir):
    """Build independent clients, each with its own cookie jar, sharing the fake stores"""
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_admission_dir] = lambda: str(admission_dir)
    app.dependency_overrides[get_storage_bucket] = lambda: "papers"

    async with AsyncExitStack() as stack:
        async def make_client() -> AsyncClient:
            transport = ASGITransport(app=app)
            return await stack.enter_async_context(AsyncClient(transport=transport, base_url='http://test'))

        yield make_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(client_factory) -> AsyncClient:
    return await client_factory()


@pytest.fixture
async def admitted_client(client: AsyncClient) -> AsyncClient:
    response = await client.post(
        "/api/v1/admin/login",
        json={"identifier": "admin_mu_eng_2024", "secret": "MU_Papers_Secure@2024"},
    )
    assert response.json()["admitted"] is True
    return client
