"""
Mock Tests API Endpoints
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.aggregation import increment_attempt
from app.core.catalog import is_set
from app.core.dependencies import get_record_store
from app.core.logging_config import get_logger
from app.core.record_store import MOCK_TESTS_TABLE, RecordStore
from app.models.mock_test import MockTest, MockTestSummary
from app.models.paper import Difficulty

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[MockTestSummary])
async def list_mock_tests(
    branch: Optional[str] = Query(None),
    semester: Optional[int] = Query(None, ge=1, le=8),
    subject: Optional[str] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    store: RecordStore = Depends(get_record_store)
):
    """List mock tests, most attempted first"""
    filters = {}
    for column, value in (("branch", branch), ("semester", semester), ("subject", subject)):
        if is_set(value):
            filters[column] = value
    if difficulty:
        filters["difficulty"] = difficulty.value

    rows = store.select(MOCK_TESTS_TABLE, filters, order_by="attempt_count", desc=True)
    return [MockTestSummary.from_test(MockTest(**row)) for row in rows]


@router.get("/{test_id}", response_model=MockTest)
async def get_mock_test(
    test_id: str,
    store: RecordStore = Depends(get_record_store)
):
    return MockTest(**store.get(MOCK_TESTS_TABLE, test_id))


@router.post("/{test_id}/attempt", response_model=MockTest)
async def start_attempt(
    test_id: str,
    store: RecordStore = Depends(get_record_store)
):
    """Count one attempt of a mock test and return the full test"""
    test = increment_attempt(MockTest(**store.get(MOCK_TESTS_TABLE, test_id)))
    row = store.update(MOCK_TESTS_TABLE, test_id, {"attempt_count": test.attempt_count})
    logger.debug(f"Mock test {test_id} attempts now {test.attempt_count}")
    return MockTest(**row)
