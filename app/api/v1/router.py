from fastapi import APIRouter
from app.api.v1.endpoints import admin, analytics, mock_tests, papers

api_router = APIRouter()

api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(papers.router, prefix="/papers", tags=["Papers"])
api_router.include_router(mock_tests.router, prefix="/mock-tests", tags=["Mock Tests"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
