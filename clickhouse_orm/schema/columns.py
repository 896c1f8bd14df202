"""
Column definitions for models.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from clickhouse_orm.core.errors import MissingDataType
from clickhouse_orm.schema.data_types import DataType

ColumnSpec = Union[DataType, "ColumnDefinition", Dict[str, Any]]


class ColumnDefinition(BaseModel):
    """
    A model attribute: its type plus column options.

    ``index`` is kept as model metadata only; no index DDL is generated for it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: Optional[DataType] = None
    primary_key: bool = False
    default: Optional[Any] = None
    codec: Optional[str] = None
    comment: Optional[str] = None
    index: bool = False


def normalize_column(field_name: str, definition: ColumnSpec) -> ColumnDefinition:
    """
    Coerce any accepted attribute form into a ColumnDefinition.

    Args:
        field_name: Name of the attribute (used in error messages)
        definition: A DataType, a ColumnDefinition, or a dict of ColumnDefinition fields

    Returns:
        ColumnDefinition with a data type

    Raises:
        MissingDataType: If no data type can be resolved
    """
    if isinstance(definition, DataType):
        return ColumnDefinition(type=definition)

    if isinstance(definition, dict):
        definition = ColumnDefinition(**definition)

    if not isinstance(definition, ColumnDefinition) or definition.type is None:
        raise MissingDataType(field_name)

    return definition
