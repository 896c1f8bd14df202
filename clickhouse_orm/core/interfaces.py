"""
Abstract interfaces for the database client and executors.

These protocols define the contract the ClickHouse client (or a test double)
must satisfy to be driven by the ORM.
"""

from typing import Any, Dict, Optional, Protocol, Sequence

from clickhouse_orm.core.models import QueryResult


class IDatabaseClient(Protocol):
    """
    Async database client collaborator.

    Mirrors the subset of ``clickhouse_connect``'s AsyncClient the ORM relies on.
    """

    async def query(self, query: str, parameters: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        """
        Run a SELECT-style query.

        Returns:
            Client result exposing ``column_names``, ``column_types``,
            ``result_rows`` and ``named_results()``
        """
        ...

    async def raw_query(self, query: str, parameters: Optional[Dict[str, Any]] = None, fmt: Optional[str] = None, **kwargs: Any) -> bytes:
        """Run a query and return the undecoded response body."""
        ...

    async def command(self, cmd: str, parameters: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        """Run a statement that returns no rows (DDL)."""
        ...

    async def insert(self, table: str, data: Sequence[Sequence[Any]], column_names: Any = "*", **kwargs: Any) -> Any:
        """Insert rows into a table."""
        ...

    async def close(self) -> None:
        """Release the client's resources."""
        ...


class IQueryExecutor(Protocol):
    """
    Execute rendered SQL and return normalized results.
    """

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
            fmt: Output format hint

        Returns:
            QueryResult with row dictionaries in ``data``
        """
        ...
