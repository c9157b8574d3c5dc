"""Record store access on top of Supabase tables.

Only the query primitives the portal needs are exposed: equality-filtered
selects with ordering and a limit, row counts, single-row update and insert.
Failures surface as QueryError and are never retried here; re-running the
operation is up to the caller.

There is no atomic increment. Counter updates are read-modify-write round
trips, so two clients incrementing the same row concurrently can lose one
update (last write wins).
"""
from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFoundError, QueryError
from app.core.logging_config import get_logger

logger = get_logger(__name__)

PAPERS_TABLE = "papers"
MOCK_TESTS_TABLE = "mock_tests"
USER_SESSIONS_TABLE = "user_sessions"


class RecordStore:
    """Thin wrapper around a supabase-py client's table API."""

    def __init__(self, client):
        self._client = client

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        return query

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Select all rows matching the equality filters."""
        try:
            query = self._apply_filters(self._client.table(table).select("*"), filters)
            if order_by:
                query = query.order(order_by, desc=desc)
            if limit is not None:
                query = query.limit(limit)
            response = query.execute()
        except Exception as e:
            logger.error(f"Select on {table} failed: {e}")
            raise QueryError(
                f"Failed to fetch {table}: {e}",
                error_code="QUERY_FAILED",
                details={"table": table, "filters": filters or {}}
            )
        return response.data or []

    def get(self, table: str, row_id: str) -> Dict[str, Any]:
        rows = self.select(table, {"id": row_id}, limit=1)
        if not rows:
            raise NotFoundError(f"No row {row_id} in {table}", error_code="NOT_FOUND")
        return rows[0]

    def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        try:
            query = self._apply_filters(self._client.table(table).select("id", count="exact"), filters)
            response = query.execute()
        except Exception as e:
            logger.error(f"Count on {table} failed: {e}")
            raise QueryError(f"Failed to count {table}: {e}", error_code="QUERY_FAILED", details={"table": table})
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def update(self, table: str, row_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """Update one row by id and return the stored row."""
        try:
            response = self._client.table(table).update(values).eq("id", row_id).execute()
        except Exception as e:
            logger.error(f"Update of {table}/{row_id} failed: {e}")
            raise QueryError(
                f"Failed to update {table}: {e}",
                error_code="UPDATE_FAILED",
                details={"table": table, "id": row_id}
            )
        if not response.data:
            raise NotFoundError(f"No row {row_id} in {table}", error_code="NOT_FOUND")
        return response.data[0]

    def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.table(table).insert(values).execute()
        except Exception as e:
            logger.error(f"Insert into {table} failed: {e}")
            raise QueryError(f"Failed to insert into {table}: {e}", error_code="INSERT_FAILED", details={"table": table})
        if not response.data:
            raise QueryError(f"Insert into {table} returned no row", error_code="INSERT_FAILED", details={"table": table})
        return response.data[0]
