"""
Condition translation.

Converts a FilterSpec (field -> value, value list or operator map) into SQL
boolean fragments that the query builder joins with AND.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from clickhouse_orm.core.errors import UnknownOperator
from clickhouse_orm.query.literals import SQLLiteral
from clickhouse_orm.query.operators import (
    LIST_OPERATORS,
    NULL_OPERATORS,
    OPERATOR_ALIASES,
    OPERATOR_MAP,
)

logger = logging.getLogger(__name__)

SEQUENCE_TYPES = (list, tuple, set, frozenset)
UNORDERED_TYPES = (set, frozenset)


def quote_value(value: Any) -> str:
    """
    Render a scalar as a single-quoted ClickHouse string literal.

    Every value is quoted whatever its type; ClickHouse converts the string
    to the column type on comparison. Backslashes and quotes are escaped.
    SQLLiteral values are returned verbatim.

    Args:
        value: Scalar to render

    Returns:
        SQL literal text
    """
    if isinstance(value, SQLLiteral):
        return str(value)

    if isinstance(value, bool):
        text = "1" if value else "0"
    elif isinstance(value, datetime):
        text = value.isoformat(sep=" ")
    elif isinstance(value, date):
        text = value.isoformat()
    else:
        text = str(value)

    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def quote_list(values: Iterable[Any]) -> str:
    """Render values as a comma-separated list of quoted literals."""
    return ", ".join(quote_value(v) for v in values)


class ConditionTranslator:
    """
    Translates FilterSpecs to SQL fragments.

    Output order follows the input: fields in mapping order, then operators in
    operator-map order.
    """

    def translate(self, filters: Mapping[str, Any]) -> List[str]:
        """
        Convert a FilterSpec into SQL fragments.

        Args:
            filters: Mapping of field name to a scalar, a sequence of scalars
                     (membership test) or an operator map

        Returns:
            List of SQL boolean fragments, one or more per field

        Raises:
            UnknownOperator: If an operator map uses an unsupported tag
        """
        fragments: List[str] = []

        for field, value in filters.items():
            if isinstance(value, SEQUENCE_TYPES):
                fragments.append(self._render_list(field, "in", value))
            elif isinstance(value, Mapping):
                fragments.extend(self._translate_operator_map(field, value))
            else:
                fragments.append(self._translate_condition(field, "eq", value))

        return fragments

    def _translate_operator_map(self, field: str, condition: Dict[str, Any]) -> List[str]:
        """Translate one field's operator map, one fragment per entry."""
        return [
            self._translate_condition(field, operator, value)
            for operator, value in condition.items()
        ]

    def _translate_condition(self, field: str, operator: str, value: Any) -> str:
        """Translate a single (field, operator, value) triple."""
        operator = OPERATOR_ALIASES.get(operator, operator)

        if operator not in OPERATOR_MAP:
            logger.debug("Rejecting operator %r on field %r", operator, field)
            raise UnknownOperator(field, operator)

        if operator in LIST_OPERATORS:
            if not isinstance(value, SEQUENCE_TYPES):
                value = [value]
            return self._render_list(field, operator, value)

        if value is None:
            if operator not in NULL_OPERATORS:
                raise ValueError(
                    f"Operator '{operator}' for field '{field}' does not accept None"
                )
            return f"{field} {NULL_OPERATORS[operator]}"

        if isinstance(value, SEQUENCE_TYPES):
            raise ValueError(
                f"Operator '{operator}' for field '{field}' expects a single value, "
                f"got {type(value).__name__}"
            )

        return f"{field} {OPERATOR_MAP[operator]} {quote_value(value)}"

    def _render_list(self, field: str, operator: str, values: Iterable[Any]) -> str:
        """
        Render IN / NOT IN; an empty list yields a constant condition.

        Set members are ordered by their rendered literal.
        """
        if isinstance(values, UNORDERED_TYPES):
            values = sorted(values, key=quote_value)
        values = list(values)
        if not values:
            return "0" if operator == "in" else "1"
        return f"{field} {OPERATOR_MAP[operator]} ({quote_list(values)})"
