"""
ORM entry point.

Owns the connection and the model registry, and wires models, schema
management and query building together.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from clickhouse_orm.adapters.clickhouse.connection import ClientFactory, Connection
from clickhouse_orm.core.models import ConnectionConfig, QueryResult
from clickhouse_orm.execution.executor import QueryExecutor
from clickhouse_orm.model.associations import Relations
from clickhouse_orm.model.model import Model
from clickhouse_orm.model.registry import ModelRegistry
from clickhouse_orm.query.builder import QueryBuilder
from clickhouse_orm.schema.columns import ColumnSpec
from clickhouse_orm.schema.data_types import DataTypes
from clickhouse_orm.schema.ddl import Schema

logger = logging.getLogger(__name__)


class ClickHouseORM:
    """
    Main ORM handle.

    Example:
        orm = ClickHouseORM({"host": "localhost", "database": "analytics"})
        User = orm.define("User", {
            "id": {"type": orm.DataTypes.UInt32, "primary_key": True},
            "name": orm.DataTypes.String,
        })
        await orm.sync()
        rows = await User.find_all(where={"name": {"like": "J%"}})
    """

    DataTypes = DataTypes

    def __init__(
        self,
        config: Optional[Union[ConnectionConfig, Dict[str, Any]]] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        """
        Initialize the ORM.

        Args:
            config: Connection settings (ConnectionConfig or dict). If not
                    provided, settings are read from CLICKHOUSE_* environment variables.
            client_factory: Async callable creating the database client
        """
        self.connection = Connection(config, client_factory=client_factory)
        self.registry = ModelRegistry()
        self.relations = Relations(self.registry)
        self.executor = QueryExecutor(self.connection)
        self.schema = Schema(self.connection)

    async def __aenter__(self) -> "ClickHouseORM":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def authenticate(self) -> QueryResult:
        """Test the database connection."""
        return await self.connection.authenticate()

    async def close(self) -> None:
        """Close the database connection."""
        await self.connection.close()

    def define(self, name: str, attributes: Dict[str, ColumnSpec], **options: Any) -> Model:
        """
        Define and register a model.

        Args:
            name: Model name
            attributes: Field name -> DataType, ColumnDefinition or dict
            **options: table_name, engine, order_by, partition_by, settings

        Returns:
            The registered Model
        """
        model = Model(name, attributes, registry=self.registry, connection=self.connection, **options)
        return self.registry.register(model)

    def model(self, name: str) -> Optional[Model]:
        """Get a defined model by name."""
        return self.registry.get(name)

    def get_models(self) -> List[Model]:
        """Get all defined models."""
        return self.registry.all()

    async def query(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        fmt: Optional[str] = "JSON",
    ) -> Union[QueryResult, bytes]:
        """Execute raw SQL."""
        return await self.executor.execute(sql, params=params, fmt=fmt)

    def create_query_builder(self) -> QueryBuilder:
        """Create a query builder bound to this ORM's connection."""
        return QueryBuilder(self.executor)

    async def sync(self, if_not_exists: bool = True, force: bool = False) -> None:
        """
        Create tables for all registered models.

        Associations are validated first so a dangling reference fails
        before any DDL runs.

        Args:
            if_not_exists: Emit ``IF NOT EXISTS``
            force: Ignore "already exists" errors
        """
        self.relations.validate()

        for model in self.registry:
            await self.schema.create_table(model, if_not_exists=if_not_exists, force=force)

        logger.info("Synced %d models", len(self.registry))
