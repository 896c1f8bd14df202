"""
Model definitions.

A Model binds a set of typed attributes to a table and offers async finder
and insert helpers built on the query builder.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

from clickhouse_orm.core.errors import InsertFailed
from clickhouse_orm.core.models import FindOptions
from clickhouse_orm.execution.executor import QueryExecutor
from clickhouse_orm.model.associations import Association, AssociationKind, Relations
from clickhouse_orm.query.builder import QueryBuilder
from clickhouse_orm.schema.columns import ColumnDefinition, ColumnSpec, normalize_column

if TYPE_CHECKING:
    from clickhouse_orm.adapters.clickhouse.connection import Connection
    from clickhouse_orm.model.registry import ModelRegistry

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_KEY = "id"


class Model:
    """
    A table-backed model.

    Rows are plain dictionaries keyed by column name.
    """

    def __init__(
        self,
        name: str,
        attributes: Dict[str, ColumnSpec],
        registry: "ModelRegistry",
        connection: "Connection",
        table_name: Optional[str] = None,
        engine: Optional[str] = None,
        order_by: Optional[Union[str, Sequence[str]]] = None,
        partition_by: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a model.

        Args:
            name: Model name
            attributes: Field name -> DataType, ColumnDefinition or dict
            registry: Registry the model belongs to
            connection: Connection used for queries and inserts
            table_name: Table name (defaults to the lower-cased model name)
            engine: Table engine for CREATE TABLE (defaults to MergeTree())
            order_by: Sorting key column(s) for CREATE TABLE
            partition_by: Partition expression for CREATE TABLE
            settings: Table-level SETTINGS for CREATE TABLE

        Raises:
            MissingDataType: If an attribute has no data type
            ValueError: If no attributes are given
        """
        if not attributes:
            raise ValueError(f"Model {name} must define at least one attribute")

        self.name = name
        self.table_name = table_name or name.lower()
        self.attributes: Dict[str, ColumnDefinition] = {
            field_name: normalize_column(field_name, definition)
            for field_name, definition in attributes.items()
        }
        self.registry = registry
        self.connection = connection
        self.executor = QueryExecutor(connection)
        self.engine = engine
        self.order_by = order_by
        self.partition_by = partition_by
        self.settings = settings or {}
        self.associations: Dict[str, Association] = {}

    def __repr__(self) -> str:
        return f"<Model {self.name} table={self.table_name}>"

    @staticmethod
    def build(values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Create an in-memory row from values."""
        return dict(values or {})

    def query_builder(self) -> QueryBuilder:
        """Start a query against this model's table."""
        return QueryBuilder(self.executor).from_(self.table_name)

    def get_primary_key(self) -> str:
        """Return the first primary-key field, or ``id`` if none is marked."""
        for field_name, definition in self.attributes.items():
            if definition.primary_key:
                return field_name
        return DEFAULT_PRIMARY_KEY

    async def find_all(self, **options: Any) -> List[Dict[str, Any]]:
        """
        Find all matching records.

        Args:
            **options: FindOptions fields: attributes, where, order_by, limit, offset

        Returns:
            List of row dictionaries
        """
        find = FindOptions(**options)

        query = self.query_builder().select(find.attributes)

        if find.where:
            query.where(find.where)

        if find.order_by:
            if isinstance(find.order_by, str):
                query.order_by([find.order_by])
            else:
                query.order_by(find.order_by)

        if find.limit is not None:
            query.limit(find.limit)

        if find.offset is not None:
            query.offset(find.offset)

        result = await query.execute()
        return result.data or []

    async def find_one(self, **options: Any) -> Optional[Dict[str, Any]]:
        """Find the first matching record, or None."""
        options["limit"] = 1
        results = await self.find_all(**options)
        return results[0] if results else None

    async def find_by_pk(self, pk: Any, **options: Any) -> Optional[Dict[str, Any]]:
        """Find a record by primary key."""
        options["where"] = {self.get_primary_key(): pk}
        return await self.find_one(**options)

    async def create(self, values: Dict[str, Any], settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Insert a single record.

        Returns:
            The inserted values

        Raises:
            InsertFailed: If the insert fails
        """
        try:
            await self.connection.insert(self.table_name, values, settings=settings)
        except InsertFailed as e:
            raise InsertFailed(f"Failed to create {self.name}: {e}") from e
        return self.build(values)

    async def bulk_create(
        self,
        records: List[Dict[str, Any]],
        settings: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Insert several records in one request.

        Raises:
            InsertFailed: If the insert fails
        """
        if not records:
            return []

        try:
            await self.connection.insert(self.table_name, records, settings=settings)
        except InsertFailed as e:
            raise InsertFailed(f"Failed to bulk create {self.name}: {e}") from e

        logger.debug("Inserted %d records into %s", len(records), self.table_name)
        return records

    async def count(self, where: Optional[Union[str, Dict[str, Any]]] = None) -> int:
        """Count records matching ``where``."""
        query = self.query_builder().select("count() AS count")

        if where:
            query.where(where)

        result = await query.execute()
        if not result.data:
            return 0
        return int(result.data[0].get("count") or 0)

    async def exists(self, where: Optional[Union[str, Dict[str, Any]]] = None) -> bool:
        return await self.count(where) > 0

    # Associations

    def _associate(
        self,
        kind: AssociationKind,
        target: Union["Model", str],
        foreign_key: Optional[str],
        alias: Optional[str],
    ) -> Association:
        target_name = target if isinstance(target, str) else target.name
        association = Association.declare(kind, self.name, target_name, foreign_key=foreign_key, alias=alias)
        self.associations[association.alias] = association
        return association

    def has_many(self, target: Union["Model", str], foreign_key: Optional[str] = None, alias: Optional[str] = None) -> Association:
        return self._associate(AssociationKind.HAS_MANY, target, foreign_key, alias)

    def belongs_to(self, target: Union["Model", str], foreign_key: Optional[str] = None, alias: Optional[str] = None) -> Association:
        return self._associate(AssociationKind.BELONGS_TO, target, foreign_key, alias)

    def has_one(self, target: Union["Model", str], foreign_key: Optional[str] = None, alias: Optional[str] = None) -> Association:
        return self._associate(AssociationKind.HAS_ONE, target, foreign_key, alias)

    async def get_associated(self, instance: Mapping[str, Any], alias: str, **find_options: Any) -> Any:
        """Load associated records for one row; see Relations.get_associated."""
        return await Relations(self.registry).get_associated(self, instance, alias, **find_options)

    async def count_associated(self, instance: Mapping[str, Any], alias: str, where: Optional[Union[str, Dict[str, Any]]] = None) -> int:
        return await Relations(self.registry).count_associated(self, instance, alias, where=where)

    async def has_associated(self, instance: Mapping[str, Any], alias: str, where: Optional[Union[str, Dict[str, Any]]] = None) -> bool:
        return await Relations(self.registry).has_associated(self, instance, alias, where=where)

    def include(self, *aliases: str) -> QueryBuilder:
        """Start a query LEFT JOINed to the named associations."""
        return Relations(self.registry).create_join_query(self, aliases)
