"""Data types, column definitions and DDL generation."""

from clickhouse_orm.schema.columns import ColumnDefinition, normalize_column
from clickhouse_orm.schema.data_types import DataType, DataTypes, TypeKind
from clickhouse_orm.schema.ddl import Schema

__all__ = [
    "ColumnDefinition",
    "DataType",
    "DataTypes",
    "Schema",
    "TypeKind",
    "normalize_column",
]
