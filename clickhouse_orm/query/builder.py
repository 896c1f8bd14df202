"""
Fluent SQL query builder.

Accumulates a QuerySpec through chained calls and renders it to a single
SELECT statement with a fixed clause order.
"""

from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from clickhouse_orm.core.interfaces import IQueryExecutor
from clickhouse_orm.core.models import QueryResult
from clickhouse_orm.query.conditions import ConditionTranslator

JoinKind = Literal["INNER", "LEFT", "RIGHT"]
OrderSpec = Union[str, Tuple[str, str]]


class JoinClause(BaseModel):
    """A single JOIN with a raw ON condition."""

    kind: JoinKind = "INNER"
    table: str
    condition: str


class QuerySpec(BaseModel):
    """Builder state. Rendering never mutates it."""

    select: List[str] = Field(default_factory=lambda: ["*"])
    source: str = ""
    joins: List[JoinClause] = Field(default_factory=list)
    where: List[str] = Field(default_factory=list)
    group_by: List[str] = Field(default_factory=list)
    having: List[str] = Field(default_factory=list)
    order_by: List[str] = Field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None


class QueryBuilder:
    """
    Builds SELECT statements.

    ``select``, ``from_`` and ``group_by`` replace earlier values, while
    ``where``, ``having``, ``order_by`` and the join methods accumulate.

    Example:
        sql = (
            QueryBuilder()
            .select(["name", "email"])
            .from_("users")
            .where({"age": {"gte": 18}})
            .order_by("name", "ASC")
            .limit(10)
            .build()
        )
    """

    def __init__(
        self,
        executor: Optional[IQueryExecutor] = None,
        translator: Optional[ConditionTranslator] = None,
    ):
        """
        Initialize query builder.

        Args:
            executor: Executor used by execute(); build() works without one
            translator: Condition translator for dict filters
        """
        self.executor = executor
        self.translator = translator or ConditionTranslator()
        self.query = QuerySpec()

    def select(self, fields: Union[str, Sequence[str], None] = None) -> "QueryBuilder":
        """Set the column list. No argument means ``*``."""
        if fields is None:
            self.query.select = ["*"]
        elif isinstance(fields, str):
            self.query.select = [fields]
        else:
            self.query.select = list(fields) or ["*"]
        return self

    def from_(self, table: str) -> "QueryBuilder":
        """Set the source table (may include an alias, e.g. ``users u``)."""
        self.query.source = table
        return self

    def join(self, table: str, condition: str, kind: JoinKind = "INNER") -> "QueryBuilder":
        """Add a JOIN clause."""
        self.query.joins.append(JoinClause(kind=kind, table=table, condition=condition))
        return self

    def left_join(self, table: str, condition: str) -> "QueryBuilder":
        return self.join(table, condition, "LEFT")

    def right_join(self, table: str, condition: str) -> "QueryBuilder":
        return self.join(table, condition, "RIGHT")

    def where(self, conditions: Union[str, Mapping[str, Any]]) -> "QueryBuilder":
        """
        Add WHERE conditions.

        Args:
            conditions: Raw SQL condition string, or a FilterSpec mapping

        Returns:
            The builder, for chaining
        """
        if isinstance(conditions, str):
            self.query.where.append(conditions)
        else:
            self.query.where.extend(self.translator.translate(conditions))
        return self

    def group_by(self, fields: Union[str, Sequence[str]]) -> "QueryBuilder":
        if isinstance(fields, str):
            self.query.group_by = [fields]
        else:
            self.query.group_by = list(fields)
        return self

    def having(self, condition: str) -> "QueryBuilder":
        self.query.having.append(condition)
        return self

    def order_by(
        self,
        field: Union[str, Sequence[OrderSpec]],
        direction: str = "ASC",
    ) -> "QueryBuilder":
        """
        Add a sort key, or replace all sort keys when given a list.

        Args:
            field: Column name, or a list of column strings / (column, direction) pairs
            direction: Direction for a single column

        Returns:
            The builder, for chaining
        """
        if isinstance(field, str):
            self.query.order_by.append(f"{field} {direction}")
        else:
            self.query.order_by = [
                item if isinstance(item, str) else f"{item[0]} {item[1]}"
                for item in field
            ]
        return self

    def limit(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError(f"limit must be non-negative, got {count}")
        self.query.limit = count
        return self

    def offset(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError(f"offset must be non-negative, got {count}")
        self.query.offset = count
        return self

    def build(self) -> str:
        """
        Render the current state to SQL.

        Returns:
            SQL statement string

        Raises:
            ValueError: If no source table was set
        """
        query = self.query
        if not query.source:
            raise ValueError("Query has no source table; call from_() first")

        parts = [f"SELECT {', '.join(query.select)} FROM {query.source}"]

        for join in query.joins:
            parts.append(f"{join.kind} JOIN {join.table} ON {join.condition}")

        if query.where:
            parts.append(f"WHERE {' AND '.join(query.where)}")

        if query.group_by:
            parts.append(f"GROUP BY {', '.join(query.group_by)}")

        if query.having:
            parts.append(f"HAVING {' AND '.join(query.having)}")

        if query.order_by:
            parts.append(f"ORDER BY {', '.join(query.order_by)}")

        if query.limit is not None:
            parts.append(f"LIMIT {query.limit}")

        if query.offset is not None:
            parts.append(f"OFFSET {query.offset}")

        return " ".join(parts)

    async def execute(self, params: Optional[Dict[str, Any]] = None) -> QueryResult:
        """
        Render and run the query.

        Args:
            params: Named parameters bound server-side (``{name:Type}`` placeholders)

        Returns:
            QueryResult with row dictionaries in ``data``
        """
        if self.executor is None:
            raise RuntimeError("QueryBuilder has no executor; build() only")
        return await self.executor.execute(self.build(), params=params)

    def __str__(self) -> str:
        return self.build()
