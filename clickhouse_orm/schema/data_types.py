"""
ClickHouse column data types.

Types are held as structured values (a kind plus its parameters) and are only
turned into DDL text by ``DataType.render()`` at schema-generation time.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from clickhouse_orm.query.conditions import quote_value


class TypeKind(str, Enum):
    """ClickHouse type families."""

    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    DECIMAL = "Decimal"
    STRING = "String"
    FIXED_STRING = "FixedString"
    DATE = "Date"
    DATETIME = "DateTime"
    DATETIME64 = "DateTime64"
    BOOLEAN = "Boolean"
    ARRAY = "Array"
    NULLABLE = "Nullable"
    LOW_CARDINALITY = "LowCardinality"
    ENUM8 = "Enum8"
    ENUM16 = "Enum16"
    UUID = "UUID"
    JSON = "JSON"


NUMERIC_KINDS = {
    TypeKind.UINT8, TypeKind.UINT16, TypeKind.UINT32, TypeKind.UINT64,
    TypeKind.INT8, TypeKind.INT16, TypeKind.INT32, TypeKind.INT64,
    TypeKind.FLOAT32, TypeKind.FLOAT64, TypeKind.DECIMAL, TypeKind.BOOLEAN,
}
STRING_KINDS = {TypeKind.STRING, TypeKind.FIXED_STRING}
DATE_KINDS = {TypeKind.DATE, TypeKind.DATETIME, TypeKind.DATETIME64}
WRAPPER_KINDS = {TypeKind.ARRAY, TypeKind.NULLABLE, TypeKind.LOW_CARDINALITY}
ENUM_KINDS = {TypeKind.ENUM8, TypeKind.ENUM16}


class DataType(BaseModel):
    """A column type with its structured parameters."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    precision: Optional[int] = None  # Decimal, DateTime64
    scale: Optional[int] = None  # Decimal
    length: Optional[int] = None  # FixedString
    inner: Optional["DataType"] = None  # Array, Nullable, LowCardinality
    values: Optional[Dict[str, int]] = None  # Enum8, Enum16

    @model_validator(mode="after")
    def validate_parameters(self) -> "DataType":
        """Ensure each kind carries the parameters it renders with."""
        kind = self.kind

        if kind == TypeKind.DECIMAL:
            if self.precision is None or self.scale is None:
                raise ValueError("Decimal requires precision and scale")
            if not 1 <= self.precision <= 76:
                raise ValueError(f"Decimal precision must be in [1, 76], got {self.precision}")
            if not 0 <= self.scale <= self.precision:
                raise ValueError(f"Decimal scale must be in [0, {self.precision}], got {self.scale}")
        elif kind == TypeKind.FIXED_STRING:
            if self.length is None or self.length < 1:
                raise ValueError("FixedString requires a positive length")
        elif kind == TypeKind.DATETIME64:
            if self.precision is None or not 0 <= self.precision <= 9:
                raise ValueError("DateTime64 precision must be in [0, 9]")
        elif kind in WRAPPER_KINDS:
            if self.inner is None:
                raise ValueError(f"{kind.value} requires an inner type")
        elif kind in ENUM_KINDS:
            if not self.values:
                raise ValueError(f"{kind.value} requires at least one value")

        return self

    def render(self) -> str:
        """
        Render the DDL text for this type.

        Returns:
            Type string, e.g. ``Decimal(10, 2)`` or ``Array(Nullable(String))``
        """
        kind = self.kind

        if kind == TypeKind.BOOLEAN:
            # stored as UInt8
            return TypeKind.UINT8.value
        if kind == TypeKind.DECIMAL:
            return f"Decimal({self.precision}, {self.scale})"
        if kind == TypeKind.FIXED_STRING:
            return f"FixedString({self.length})"
        if kind == TypeKind.DATETIME64:
            return f"DateTime64({self.precision})"
        if kind in WRAPPER_KINDS:
            return f"{kind.value}({self.inner.render()})"
        if kind in ENUM_KINDS:
            members = ", ".join(f"{quote_value(name)} = {code}" for name, code in self.values.items())
            return f"{kind.value}({members})"
        return kind.value

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    @property
    def is_string(self) -> bool:
        return self.kind in STRING_KINDS

    @property
    def is_date(self) -> bool:
        return self.kind in DATE_KINDS

    @property
    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY

    @property
    def is_nullable(self) -> bool:
        return self.kind == TypeKind.NULLABLE

    def __str__(self) -> str:
        return self.render()


DataType.model_rebuild()


class DataTypes:
    """
    Constructors for every supported type.

    Parameterless types are ready-made constants; parameterized ones are
    functions, e.g. ``DataTypes.Decimal(10, 2)`` or ``DataTypes.Array(DataTypes.String)``.
    """

    # Numeric types
    UInt8 = DataType(kind=TypeKind.UINT8)
    UInt16 = DataType(kind=TypeKind.UINT16)
    UInt32 = DataType(kind=TypeKind.UINT32)
    UInt64 = DataType(kind=TypeKind.UINT64)
    Int8 = DataType(kind=TypeKind.INT8)
    Int16 = DataType(kind=TypeKind.INT16)
    Int32 = DataType(kind=TypeKind.INT32)
    Int64 = DataType(kind=TypeKind.INT64)
    Float32 = DataType(kind=TypeKind.FLOAT32)
    Float64 = DataType(kind=TypeKind.FLOAT64)

    # String types
    String = DataType(kind=TypeKind.STRING)

    # Date and time types
    Date = DataType(kind=TypeKind.DATE)
    DateTime = DataType(kind=TypeKind.DATETIME)

    Boolean = DataType(kind=TypeKind.BOOLEAN)
    UUID = DataType(kind=TypeKind.UUID)
    JSON = DataType(kind=TypeKind.JSON)

    @staticmethod
    def Decimal(precision: int, scale: int) -> DataType:
        return DataType(kind=TypeKind.DECIMAL, precision=precision, scale=scale)

    @staticmethod
    def FixedString(length: int) -> DataType:
        return DataType(kind=TypeKind.FIXED_STRING, length=length)

    @staticmethod
    def DateTime64(precision: int = 3) -> DataType:
        return DataType(kind=TypeKind.DATETIME64, precision=precision)

    @staticmethod
    def Array(inner: DataType) -> DataType:
        return DataType(kind=TypeKind.ARRAY, inner=inner)

    @staticmethod
    def Nullable(inner: DataType) -> DataType:
        return DataType(kind=TypeKind.NULLABLE, inner=inner)

    @staticmethod
    def LowCardinality(inner: DataType) -> DataType:
        return DataType(kind=TypeKind.LOW_CARDINALITY, inner=inner)

    @staticmethod
    def Enum8(values: Dict[str, int]) -> DataType:
        return DataType(kind=TypeKind.ENUM8, values=values)

    @staticmethod
    def Enum16(values: Dict[str, int]) -> DataType:
        return DataType(kind=TypeKind.ENUM16, values=values)
