"""ClickHouse adapter for the ORM."""

from clickhouse_orm.adapters.clickhouse.connection import Connection

__all__ = ["Connection"]
