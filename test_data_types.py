"""
Tests for column data types.
"""

import pytest
from pydantic import ValidationError

from clickhouse_orm.schema.data_types import DataType, DataTypes, TypeKind


def test_simple_types_render_their_name():
    assert DataTypes.String.render() == "String"
    assert DataTypes.UInt32.render() == "UInt32"
    assert DataTypes.DateTime.render() == "DateTime"
    assert DataTypes.UUID.render() == "UUID"


def test_parameterized_types():
    assert DataTypes.Decimal(10, 2).render() == "Decimal(10, 2)"
    assert DataTypes.FixedString(16).render() == "FixedString(16)"
    assert DataTypes.DateTime64().render() == "DateTime64(3)"
    assert DataTypes.DateTime64(6).render() == "DateTime64(6)"


def test_wrapped_types_nest():
    assert DataTypes.Array(DataTypes.String).render() == "Array(String)"
    assert str(DataTypes.Nullable(DataTypes.Int64)) == "Nullable(Int64)"
    nested = DataTypes.Array(DataTypes.Nullable(DataTypes.LowCardinality(DataTypes.String)))
    assert nested.render() == "Array(Nullable(LowCardinality(String)))"


def test_enum_types():
    assert DataTypes.Enum8({"active": 1, "inactive": 2}).render() == "Enum8('active' = 1, 'inactive' = 2)"
    assert DataTypes.Enum16({"a": 1000}).render() == "Enum16('a' = 1000)"


def test_enum_member_names_are_escaped():
    assert DataTypes.Enum8({"it's": 1}).render() == "Enum8('it\\'s' = 1)"


def test_boolean_is_stored_as_uint8():
    assert DataTypes.Boolean.kind == TypeKind.BOOLEAN
    assert DataTypes.Boolean.render() == "UInt8"


def test_structured_parameters_are_kept():
    decimal = DataTypes.Decimal(18, 4)
    assert decimal.kind == TypeKind.DECIMAL
    assert (decimal.precision, decimal.scale) == (18, 4)

    array = DataTypes.Array(DataTypes.UInt8)
    assert array.inner == DataTypes.UInt8


def test_predicates():
    assert DataTypes.Float64.is_numeric
    assert DataTypes.Decimal(10, 2).is_numeric
    assert not DataTypes.String.is_numeric

    assert DataTypes.String.is_string
    assert DataTypes.FixedString(2).is_string

    assert DataTypes.Date.is_date
    assert DataTypes.DateTime64().is_date

    assert DataTypes.Array(DataTypes.String).is_array
    assert DataTypes.Nullable(DataTypes.String).is_nullable
    assert not DataTypes.String.is_nullable


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": TypeKind.DECIMAL, "precision": 10},
        {"kind": TypeKind.DECIMAL, "precision": 5, "scale": 6},
        {"kind": TypeKind.DECIMAL, "precision": 100, "scale": 2},
        {"kind": TypeKind.FIXED_STRING},
        {"kind": TypeKind.FIXED_STRING, "length": 0},
        {"kind": TypeKind.DATETIME64, "precision": 12},
        {"kind": TypeKind.ARRAY},
        {"kind": TypeKind.ENUM8, "values": {}},
    ],
)
def test_missing_or_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValidationError):
        DataType(**kwargs)


def test_data_types_are_immutable():
    with pytest.raises(ValidationError):
        DataTypes.String.kind = TypeKind.UUID
