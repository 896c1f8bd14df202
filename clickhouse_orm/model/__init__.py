"""Models, the model registry and associations."""

from clickhouse_orm.model.associations import Association, AssociationKind, Relations
from clickhouse_orm.model.model import Model
from clickhouse_orm.model.registry import ModelRegistry

__all__ = [
    "Association",
    "AssociationKind",
    "Model",
    "ModelRegistry",
    "Relations",
]
