"""
Relationships between models.

Associations are declared on a source model and resolved through the model
registry by the accessor functions on ``Relations``.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from clickhouse_orm.core.errors import UnknownAssociation
from clickhouse_orm.query.builder import QueryBuilder
from clickhouse_orm.query.conditions import ConditionTranslator

if TYPE_CHECKING:
    from clickhouse_orm.model.model import Model
    from clickhouse_orm.model.registry import ModelRegistry


class AssociationKind(str, Enum):
    """Supported relationship kinds."""

    HAS_MANY = "hasMany"
    BELONGS_TO = "belongsTo"
    HAS_ONE = "hasOne"


class Association(BaseModel):
    """A declared relationship from ``source`` to ``target`` (model names)."""

    model_config = ConfigDict(frozen=True)

    kind: AssociationKind
    source: str
    target: str
    foreign_key: str
    alias: str

    @classmethod
    def declare(
        cls,
        kind: AssociationKind,
        source: str,
        target: str,
        foreign_key: Optional[str] = None,
        alias: Optional[str] = None,
    ) -> "Association":
        """
        Build an association, filling naming-convention defaults.

        Defaults:
            foreign_key: ``<source>_id`` for has_many / has_one,
                         ``<target>_id`` for belongs_to
            alias: ``<target>s`` for has_many, ``<target>`` otherwise

        Args:
            kind: Relationship kind
            source: Name of the declaring model
            target: Name of the associated model
            foreign_key: Explicit foreign key column
            alias: Explicit accessor name

        Returns:
            Association
        """
        if foreign_key is None:
            owner = target if kind == AssociationKind.BELONGS_TO else source
            foreign_key = f"{owner.lower()}_id"

        if alias is None:
            alias = target.lower()
            if kind == AssociationKind.HAS_MANY:
                alias += "s"

        return cls(kind=kind, source=source, target=target, foreign_key=foreign_key, alias=alias)


class Relations:
    """
    Accessors for declared associations.

    All lookups go through the registry handed in at construction.
    """

    def __init__(self, registry: "ModelRegistry"):
        """
        Initialize relations.

        Args:
            registry: Registry used to resolve association targets
        """
        self.registry = registry

    def validate(self) -> None:
        """
        Check that every association points at a registered model.

        Raises:
            UnknownAssociation: If a target model is not registered
        """
        for model in self.registry:
            for association in model.associations.values():
                self.resolve_target(association)

    def get_association(self, model: "Model", alias: str) -> Association:
        try:
            return model.associations[alias]
        except KeyError:
            raise UnknownAssociation(f"Association {alias} not found on {model.name}") from None

    def resolve_target(self, association: Association) -> "Model":
        target = self.registry.get(association.target)
        if target is None:
            raise UnknownAssociation(f"Associated model {association.target} not found")
        return target

    async def get_associated(
        self,
        model: "Model",
        instance: Mapping[str, Any],
        alias: str,
        **find_options: Any,
    ) -> Any:
        """
        Load the records associated with one row of ``model``.

        Args:
            model: Model the row belongs to
            instance: Row dictionary
            alias: Association name
            **find_options: Extra finder options; ``where`` (a mapping or raw SQL
                            string) is combined with the key condition

        Returns:
            List of rows for has_many, a row or None otherwise
        """
        association = self.get_association(model, alias)
        target = self.resolve_target(association)
        extra_where = find_options.pop("where", None)

        if association.kind == AssociationKind.BELONGS_TO:
            foreign_value = instance.get(association.foreign_key)
            if foreign_value is None:
                return None
            where = self._merge_where({target.get_primary_key(): foreign_value}, extra_where)
            return await target.find_one(where=where, **find_options)

        key_value = instance.get(model.get_primary_key())
        if key_value is None:
            return [] if association.kind == AssociationKind.HAS_MANY else None

        where = self._merge_where({association.foreign_key: key_value}, extra_where)
        if association.kind == AssociationKind.HAS_MANY:
            return await target.find_all(where=where, **find_options)
        return await target.find_one(where=where, **find_options)

    async def count_associated(
        self,
        model: "Model",
        instance: Mapping[str, Any],
        alias: str,
        where: Optional[Union[str, Dict[str, Any]]] = None,
    ) -> int:
        """
        Count has_many / has_one records attached to one row.

        A row without a primary key value has nothing attached and counts 0.

        Raises:
            UnknownAssociation: If the alias is unknown
            ValueError: For belongs_to associations
        """
        association = self.get_association(model, alias)
        if association.kind == AssociationKind.BELONGS_TO:
            raise ValueError(f"Association {alias} on {model.name} is belongs_to; count is not available")

        target = self.resolve_target(association)
        key_value = instance.get(model.get_primary_key())
        if key_value is None:
            return 0

        return await target.count(where=self._merge_where({association.foreign_key: key_value}, where))

    async def has_associated(
        self,
        model: "Model",
        instance: Mapping[str, Any],
        alias: str,
        where: Optional[Union[str, Dict[str, Any]]] = None,
    ) -> bool:
        return await self.count_associated(model, instance, alias, where=where) > 0

    @staticmethod
    def _merge_where(
        key_filter: Dict[str, Any],
        extra: Optional[Union[str, Mapping[str, Any]]],
    ) -> Union[str, Dict[str, Any]]:
        """
        Combine the key condition with caller conditions.

        Mapping conditions are merged into the key filter and win on conflicts.
        A raw SQL string is ANDed with the rendered key condition.

        Raises:
            TypeError: If ``extra`` is neither a string nor a mapping
        """
        if extra is None:
            return dict(key_filter)
        if isinstance(extra, str):
            fragments = ConditionTranslator().translate(key_filter)
            return " AND ".join(fragments + [f"({extra})"])
        if isinstance(extra, Mapping):
            return {**key_filter, **extra}
        raise TypeError(f"where must be a SQL string or a mapping, got {type(extra).__name__}")

    def build_join_condition(self, model: "Model", association: Association) -> str:
        """
        Render the ON condition joining ``model`` to the association target.

        Returns:
            SQL condition, e.g. ``users.id = posts.user_id``
        """
        target = self.resolve_target(association)

        if association.kind == AssociationKind.BELONGS_TO:
            return (
                f"{model.table_name}.{association.foreign_key} = "
                f"{target.table_name}.{target.get_primary_key()}"
            )

        return (
            f"{model.table_name}.{model.get_primary_key()} = "
            f"{target.table_name}.{association.foreign_key}"
        )

    def create_join_query(self, model: "Model", includes: Sequence[str]) -> QueryBuilder:
        """
        Start a query on ``model`` LEFT JOINed to the given associations.

        Args:
            model: Base model
            includes: Association aliases to join

        Returns:
            QueryBuilder ready for further chaining
        """
        query = QueryBuilder(model.executor).select("*").from_(model.table_name)

        for alias in includes:
            association = self.get_association(model, alias)
            target = self.resolve_target(association)
            query.left_join(target.table_name, self.build_join_condition(model, association))

        return query
