"""
Schema management for ClickHouse.

Generates and runs CREATE / DROP / ALTER statements for models.
"""

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Sequence, Union

from clickhouse_orm.core.errors import QueryExecutionFailed, SchemaError
from clickhouse_orm.query.conditions import quote_value
from clickhouse_orm.query.literals import SQLLiteral
from clickhouse_orm.schema.columns import ColumnSpec, normalize_column

if TYPE_CHECKING:
    from clickhouse_orm.adapters.clickhouse.connection import Connection
    from clickhouse_orm.model.model import Model

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "MergeTree()"


class Schema:
    """
    Generates DDL from models and runs it on a connection.

    SQL generation methods are pure; the async methods dispatch through the
    connection.
    """

    def __init__(self, connection: "Connection"):
        """
        Initialize schema manager.

        Args:
            connection: Connection used for DDL statements
        """
        self.connection = connection

    def generate_create_table_sql(self, model: "Model", if_not_exists: bool = True) -> str:
        """
        Generate the CREATE TABLE statement for a model.

        ORDER BY comes from the model's ``order_by`` option, else its primary
        key field(s), else the first column.

        Args:
            model: Model to render
            if_not_exists: Emit ``IF NOT EXISTS``

        Returns:
            CREATE TABLE SQL
        """
        columns: List[str] = []
        primary_keys: List[str] = []

        for field_name, definition in model.attributes.items():
            columns.append(self.generate_column_definition(field_name, definition))
            if normalize_column(field_name, definition).primary_key:
                primary_keys.append(field_name)

        if model.order_by:
            order_by = self._render_key(model.order_by)
        elif primary_keys:
            order_by = self._render_key(primary_keys)
        else:
            order_by = next(iter(model.attributes))

        sql = "CREATE TABLE"
        if if_not_exists:
            sql += " IF NOT EXISTS"

        sql += f" {model.table_name} (\n"
        sql += "  " + ",\n  ".join(columns) + "\n"
        sql += f") ENGINE = {model.engine or DEFAULT_ENGINE}"

        if model.partition_by:
            sql += f"\nPARTITION BY {model.partition_by}"

        sql += f"\nORDER BY {order_by}"

        if model.settings:
            settings = ", ".join(f"{key} = {value}" for key, value in model.settings.items())
            sql += f"\nSETTINGS {settings}"

        return sql

    def generate_column_definition(self, field_name: str, definition: ColumnSpec) -> str:
        """
        Render one column for CREATE TABLE or ALTER TABLE ADD COLUMN.

        String defaults are quoted; numbers and ``literal()`` values are
        emitted as-is.

        Raises:
            MissingDataType: If the definition has no type
        """
        column = normalize_column(field_name, definition)
        sql = f"{field_name} {column.type.render()}"

        if column.default is not None:
            sql += f" DEFAULT {self._render_default(column.default)}"

        if column.codec:
            sql += f" CODEC({column.codec})"

        if column.comment:
            sql += f" COMMENT {quote_value(column.comment)}"

        return sql

    async def create_table(self, model: "Model", if_not_exists: bool = True, force: bool = False) -> None:
        """
        Create the table for a model.

        Args:
            model: Model to create
            if_not_exists: Emit ``IF NOT EXISTS``
            force: Ignore "already exists" errors

        Raises:
            SchemaError: If the server rejects the statement
        """
        sql = self.generate_create_table_sql(model, if_not_exists=if_not_exists)

        try:
            await self.connection.command(sql)
        except QueryExecutionFailed as e:
            if force and "already exists" in str(e):
                logger.info("Table %s already exists", model.table_name)
                return
            raise SchemaError(f"Failed to create table {model.table_name}: {e}") from e

        logger.info("Table %s created successfully", model.table_name)

    async def drop_table(self, table_name: str, if_exists: bool = True) -> None:
        """
        Drop a table.

        Raises:
            SchemaError: If the statement fails
        """
        sql = "DROP TABLE"
        if if_exists:
            sql += " IF EXISTS"
        sql += f" {table_name}"

        try:
            await self.connection.command(sql)
        except QueryExecutionFailed as e:
            raise SchemaError(f"Failed to drop table {table_name}: {e}") from e

        logger.info("Table %s dropped successfully", table_name)

    async def table_exists(self, table_name: str) -> bool:
        """Check system.tables for the table in the current database."""
        result = await self.connection.query(
            "SELECT count() AS count FROM system.tables "
            "WHERE database = currentDatabase() AND name = {name:String}",
            params={"name": table_name},
        )
        return bool(result.data) and int(result.data[0].get("count", 0)) > 0

    async def describe_table(self, table_name: str) -> List[Dict[str, Any]]:
        """Return the DESCRIBE TABLE rows for a table."""
        result = await self.connection.query(f"DESCRIBE TABLE {table_name}")
        return result.data

    async def add_column(self, table_name: str, column_name: str, definition: ColumnSpec) -> None:
        """
        Add a column to an existing table.

        Raises:
            SchemaError: If the statement fails
        """
        column_sql = self.generate_column_definition(column_name, definition)
        sql = f"ALTER TABLE {table_name} ADD COLUMN {column_sql}"

        try:
            await self.connection.command(sql)
        except QueryExecutionFailed as e:
            raise SchemaError(f"Failed to add column: {e}") from e

        logger.info("Column %s added to %s", column_name, table_name)

    async def drop_column(self, table_name: str, column_name: str) -> None:
        """
        Drop a column from a table.

        Raises:
            SchemaError: If the statement fails
        """
        sql = f"ALTER TABLE {table_name} DROP COLUMN {column_name}"

        try:
            await self.connection.command(sql)
        except QueryExecutionFailed as e:
            raise SchemaError(f"Failed to drop column: {e}") from e

        logger.info("Column %s dropped from %s", column_name, table_name)

    @staticmethod
    def _render_key(key: Union[str, Sequence[str]]) -> str:
        """Render a sorting key; several columns become a tuple."""
        if isinstance(key, str):
            return key
        if len(key) == 1:
            return key[0]
        return f"({', '.join(key)})"

    @staticmethod
    def _render_default(value: Any) -> str:
        if isinstance(value, SQLLiteral):
            return str(value)
        if isinstance(value, (str, date)):
            return quote_value(value)
        if isinstance(value, bool):
            return "1" if value else "0"
        return str(value)
