"""
ClickHouse connection manager.

Wraps a ``clickhouse_connect`` async client: lazy creation, connection test,
query / command / insert dispatch and error wrapping.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import clickhouse_connect

from clickhouse_orm.core.errors import (
    AuthenticationFailure,
    ConnectionFailure,
    InsertFailed,
    QueryExecutionFailed,
)
from clickhouse_orm.core.interfaces import IDatabaseClient
from clickhouse_orm.core.models import ConnectionConfig, QueryResult
from clickhouse_orm.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Awaitable[IDatabaseClient]]


class Connection:
    """
    Manages the single client used by an ORM instance.

    The client is created on first use and reused until close().
    """

    def __init__(
        self,
        config: Optional[Union[ConnectionConfig, Dict[str, Any]]] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        """
        Initialize connection manager.

        Args:
            config: Connection settings; a dict is validated into ConnectionConfig.
                    If not provided, settings are read from the environment.
            client_factory: Async callable creating the client. Defaults to
                            ``clickhouse_connect.get_async_client``.
        """
        if config is None:
            config = ConnectionConfig.from_env()
        elif isinstance(config, dict):
            config = ConnectionConfig(**config)

        self.config: ConnectionConfig = config
        self.client_factory: ClientFactory = client_factory or clickhouse_connect.get_async_client
        self.client: Optional[IDatabaseClient] = None

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    async def connect(self) -> IDatabaseClient:
        """
        Create the client if needed.

        Returns:
            The live client

        Raises:
            ConnectionFailure: If the client cannot be created
        """
        if self.client is not None:
            return self.client

        try:
            self.client = await self.client_factory(
                host=self.config.host,
                port=self.config.port,
                username=self.config.username,
                password=self.config.password,
                database=self.config.database,
                secure=self.config.secure,
                settings=self.config.settings,
            )
        except Exception as e:
            raise ConnectionFailure(f"Failed to connect to ClickHouse: {e}") from e

        logger.debug("Connected to ClickHouse at %s", self.config.url)
        return self.client

    async def authenticate(self) -> QueryResult:
        """
        Test the connection with a trivial query.

        Raises:
            AuthenticationFailure: If the client cannot be created or the query fails
        """
        try:
            client = await self.connect()
            result = await client.query("SELECT 1 AS test")
        except Exception as e:
            raise AuthenticationFailure(f"Authentication failed: {e}") from e

        return ResultFormatter.format_result(result)

    async def query(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        fmt: Optional[str] = "JSON",
    ) -> Union[QueryResult, bytes]:
        """
        Execute a query.

        Args:
            sql: SQL text
            params: Named parameters for server-side binding
            fmt: Output format. "JSON" (or None) returns a QueryResult; any
                 other ClickHouse format name returns the raw response bytes.

        Returns:
            QueryResult or raw bytes

        Raises:
            QueryExecutionFailed: If the client rejects the query or the request fails
        """
        logger.debug("Executing query: %s", sql)
        try:
            client = await self.connect()
            if fmt is None or fmt == "JSON":
                result = await client.query(sql, parameters=params or {})
                return ResultFormatter.format_result(result)
            return await client.raw_query(sql, parameters=params or {}, fmt=fmt)
        except Exception as e:
            raise QueryExecutionFailed(f"Query execution failed: {e}") from e

    async def command(self, sql: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a statement that returns no rows (DDL).

        Raises:
            QueryExecutionFailed: If the client rejects the statement
        """
        logger.debug("Executing command: %s", sql)
        try:
            client = await self.connect()
            return await client.command(sql, parameters=params or {})
        except Exception as e:
            raise QueryExecutionFailed(f"Query execution failed: {e}") from e

    async def insert(
        self,
        table: str,
        data: Union[Dict[str, Any], List[Dict[str, Any]]],
        settings: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Insert one row or a list of rows.

        Args:
            table: Target table name
            data: Row dictionary or list of row dictionaries
            settings: Per-insert ClickHouse settings

        Returns:
            The client's insert summary

        Raises:
            InsertFailed: If the insert fails
        """
        records = data if isinstance(data, list) else [data]
        column_names, rows = ResultFormatter.dicts_to_rows(records)

        try:
            client = await self.connect()
            return await client.insert(
                table,
                rows,
                column_names=column_names,
                settings=settings or {},
            )
        except Exception as e:
            raise InsertFailed(f"Insert failed: {e}") from e

    async def close(self) -> None:
        """Close the client if one was created."""
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.debug("Closed ClickHouse connection")
