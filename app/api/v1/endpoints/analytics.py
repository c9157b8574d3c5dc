from fastapi import APIRouter, Depends

from app.core.aggregation import compute_stats
from app.core.dependencies import get_record_store
from app.core.record_store import MOCK_TESTS_TABLE, PAPERS_TABLE, USER_SESSIONS_TABLE, RecordStore
from app.models.mock_test import MockTest
from app.models.paper import Paper
from app.models.stats import DerivedStats

router = APIRouter()


@router.get("/stats", response_model=DerivedStats)
async def get_stats(store: RecordStore = Depends(get_record_store)):
    """Dashboard statistics over every paper, mock test and visitor session"""
    papers = [Paper(**row) for row in store.select(PAPERS_TABLE)]
    tests = [MockTest(**row) for row in store.select(MOCK_TESTS_TABLE)]
    session_count = store.count(USER_SESSIONS_TABLE)
    return compute_stats(papers, tests, session_count)
