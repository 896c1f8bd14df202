"""Condition translation and query building."""

from clickhouse_orm.query.builder import JoinClause, QueryBuilder, QuerySpec
from clickhouse_orm.query.conditions import ConditionTranslator, quote_value
from clickhouse_orm.query.literals import SQLLiteral, literal

__all__ = [
    "ConditionTranslator",
    "JoinClause",
    "QueryBuilder",
    "QuerySpec",
    "SQLLiteral",
    "literal",
    "quote_value",
]
