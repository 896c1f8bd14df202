"""
Query execution coordinator.

Hands rendered SQL to the connection and returns normalized results.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from clickhouse_orm.core.models import QueryResult

if TYPE_CHECKING:
    from clickhouse_orm.adapters.clickhouse.connection import Connection

logger = logging.getLogger(__name__)


class QueryExecutor:
    """
    Coordinates query execution.

    Implements the IQueryExecutor interface on top of a Connection. Errors
    from the connection propagate unchanged; there is no retry.
    """

    def __init__(self, connection: "Connection"):
        """
        Initialize query executor.

        Args:
            connection: Connection that owns the database client
        """
        self.connection = connection

    async def execute(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        fmt: Optional[str] = None,
    ) -> QueryResult:
        """
        Execute a SQL statement.

        Args:
            sql: Rendered SQL text
            params: Named parameters for server-side binding
            fmt: Output format hint; non-JSON formats return raw bytes

        Returns:
            QueryResult (empty ``data`` list when no rows match)

        Raises:
            QueryExecutionFailed: If the client rejects the statement
        """
        result = await self.connection.query(sql, params=params, fmt=fmt)
        if isinstance(result, QueryResult):
            logger.debug("Query returned %d rows", result.rows)
        return result

    async def execute_raw(self, sql: str, fmt: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """
        Execute a statement and return the undecoded response.

        Args:
            sql: SQL text
            fmt: ClickHouse output format name (e.g. "CSVWithNames")
            params: Named parameters for server-side binding

        Returns:
            Raw response bytes
        """
        return await self.connection.query(sql, params=params, fmt=fmt)
