"""Query execution and result formatting."""

from clickhouse_orm.execution.executor import QueryExecutor
from clickhouse_orm.execution.result_formatter import ResultFormatter

__all__ = ["QueryExecutor", "ResultFormatter"]
