"""
ClickHouse ORM - models, DDL generation and a fluent query builder.

Main entry point for defining models and building queries against ClickHouse.
"""

from clickhouse_orm.orm import ClickHouseORM
from clickhouse_orm.query.literals import literal
from clickhouse_orm.schema.data_types import DataTypes

__all__ = ["ClickHouseORM", "DataTypes", "literal"]
