"""
Tests for FilterSpec -> SQL condition translation.
"""

from datetime import date, datetime

import pytest

from clickhouse_orm.core.errors import UnknownOperator
from clickhouse_orm.query.conditions import ConditionTranslator, quote_value
from clickhouse_orm.query.literals import literal


@pytest.fixture
def translator():
    return ConditionTranslator()


def test_scalar_renders_equality(translator):
    assert translator.translate({"name": "alice"}) == ["name = 'alice'"]
    assert translator.translate({"age": 30}) == ["age = '30'"]


def test_list_renders_membership_in_input_order(translator):
    assert translator.translate({"status": ["b", "a"]}) == ["status IN ('b', 'a')"]
    assert translator.translate({"id": (3, 1, 2)}) == ["id IN ('3', '1', '2')"]


def test_operator_map_keeps_key_order(translator):
    fragments = translator.translate({"age": {"gte": 18, "lte": 65}})
    assert fragments == ["age >= '18'", "age <= '65'"]
    assert " AND ".join(fragments) == "age >= '18' AND age <= '65'"


def test_fields_keep_input_order(translator):
    fragments = translator.translate({
        "age": {"gte": 18, "lte": 65},
        "name": {"like": "John%"},
        "status": {"in": ["active", "pending"]},
    })
    assert fragments == [
        "age >= '18'",
        "age <= '65'",
        "name LIKE 'John%'",
        "status IN ('active', 'pending')",
    ]


@pytest.mark.parametrize(
    "operator, expected",
    [
        ("eq", "x = '5'"),
        ("ne", "x != '5'"),
        ("gt", "x > '5'"),
        ("gte", "x >= '5'"),
        ("lt", "x < '5'"),
        ("lte", "x <= '5'"),
        ("like", "x LIKE '5'"),
    ],
)
def test_scalar_operators(translator, operator, expected):
    assert translator.translate({"x": {operator: 5}}) == [expected]


def test_not_in_and_alias(translator):
    assert translator.translate({"x": {"notIn": [1, 2]}}) == ["x NOT IN ('1', '2')"]
    assert translator.translate({"x": {"not_in": [1, 2]}}) == ["x NOT IN ('1', '2')"]


def test_membership_operator_accepts_single_value(translator):
    assert translator.translate({"x": {"in": "a"}}) == ["x IN ('a')"]


def test_empty_membership_lists(translator):
    assert translator.translate({"x": []}) == ["0"]
    assert translator.translate({"x": {"in": []}}) == ["0"]
    assert translator.translate({"x": {"notIn": []}}) == ["1"]


def test_unknown_operator_fails_loudly(translator):
    with pytest.raises(UnknownOperator) as exc_info:
        translator.translate({"age": {"between": [1, 2]}})

    assert exc_info.value.field == "age"
    assert exc_info.value.operator == "between"
    assert "between" in str(exc_info.value)


def test_none_renders_null_checks(translator):
    assert translator.translate({"deleted_at": None}) == ["deleted_at IS NULL"]
    assert translator.translate({"deleted_at": {"ne": None}}) == ["deleted_at IS NOT NULL"]

    with pytest.raises(ValueError):
        translator.translate({"age": {"gt": None}})


def test_sequence_for_scalar_operator_is_rejected(translator):
    with pytest.raises(ValueError):
        translator.translate({"age": {"gt": [1, 2]}})


def test_literal_is_not_quoted(translator):
    assert translator.translate({"created_at": {"lt": literal("now()")}}) == ["created_at < now()"]


def test_empty_filter_spec(translator):
    assert translator.translate({}) == []


def test_quote_value_escapes_quotes_and_backslashes():
    assert quote_value("O'Brien") == "'O\\'Brien'"
    assert quote_value("a\\b") == "'a\\\\b'"
    assert quote_value("x' OR 1=1 --") == "'x\\' OR 1=1 --'"


def test_quote_value_types():
    assert quote_value(True) == "'1'"
    assert quote_value(False) == "'0'"
    assert quote_value(1.5) == "'1.5'"
    assert quote_value(date(2024, 1, 31)) == "'2024-01-31'"
    assert quote_value(datetime(2024, 1, 31, 8, 5, 9)) == "'2024-01-31 08:05:09'"


def test_quote_value_keeps_fractional_seconds(translator):
    assert quote_value(datetime(2024, 1, 1, 12, 0, 0, 123000)) == "'2024-01-01 12:00:00.123000'"
    assert translator.translate({"ts": {"gte": datetime(2024, 1, 1, 0, 0, 0, 5)}}) == [
        "ts >= '2024-01-01 00:00:00.000005'"
    ]


def test_set_values_render_in_sorted_order(translator):
    assert translator.translate({"status": {"b", "c", "a"}}) == ["status IN ('a', 'b', 'c')"]
    assert translator.translate({"id": {"notIn": frozenset([3, 1, 2])}}) == ["id NOT IN ('1', '2', '3')"]