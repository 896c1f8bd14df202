"""
Result formatting utilities.

Normalizes client query results into the ORM's QueryResult shape.
"""

from typing import Any, Dict, List, Sequence

from clickhouse_orm.core.models import QueryResult


class ResultFormatter:
    """
    Formats client results into a consistent structure.

    Accepts anything shaped like a ``clickhouse_connect`` QueryResult:
    ``column_names``, ``column_types``, ``result_rows`` and optionally
    ``summary``.
    """

    @staticmethod
    def format_result(result: Any) -> QueryResult:
        """
        Format a single client result.

        Args:
            result: Raw result returned by the database client

        Returns:
            QueryResult with one dict per row, keyed by column name
        """
        column_names: Sequence[str] = tuple(getattr(result, "column_names", ()) or ())
        column_types = getattr(result, "column_types", ()) or ()
        rows = getattr(result, "result_rows", None) or []

        data = ResultFormatter.rows_to_dicts(column_names, rows)

        meta = [
            {"name": name, "type": getattr(col_type, "name", str(col_type))}
            for name, col_type in zip(column_names, column_types)
        ]

        return QueryResult(
            data=data,
            meta=meta,
            rows=len(data),
            statistics=dict(getattr(result, "summary", None) or {}),
        )

    @staticmethod
    def rows_to_dicts(column_names: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[Dict[str, Any]]:
        """Zip each row with the column names."""
        return [dict(zip(column_names, row)) for row in rows]

    @staticmethod
    def dicts_to_rows(records: Sequence[Dict[str, Any]]) -> tuple:
        """
        Split row dictionaries into column names and value rows for insert.

        Columns appear in first-seen order; a key missing from a record is
        sent as None.

        Args:
            records: Row dictionaries

        Returns:
            Tuple of (column_names, rows)
        """
        column_names: List[str] = []
        for record in records:
            for key in record:
                if key not in column_names:
                    column_names.append(key)

        rows = [[record.get(name) for name in column_names] for record in records]
        return column_names, rows
