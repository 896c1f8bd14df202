"""Core interfaces, models and errors for the ORM."""

from clickhouse_orm.core.errors import (
    ClickHouseORMError,
    ConnectionFailure,
    AuthenticationFailure,
    QueryExecutionFailed,
    InsertFailed,
    SchemaError,
    MissingDataType,
    UnknownAssociation,
    UnknownOperator,
)
from clickhouse_orm.core.interfaces import IDatabaseClient, IQueryExecutor
from clickhouse_orm.core.models import ConnectionConfig, FindOptions, QueryResult

__all__ = [
    "ClickHouseORMError",
    "ConnectionFailure",
    "AuthenticationFailure",
    "QueryExecutionFailed",
    "InsertFailed",
    "SchemaError",
    "MissingDataType",
    "UnknownAssociation",
    "UnknownOperator",
    "IDatabaseClient",
    "IQueryExecutor",
    "ConnectionConfig",
    "FindOptions",
    "QueryResult",
]
