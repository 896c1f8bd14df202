"""
Exception hierarchy for the ORM.

Every failure coming back from the ClickHouse client is re-raised as one of
these, with a human-readable prefix and the original exception chained.
"""


class ClickHouseORMError(Exception):
    """Base class for all ORM errors."""


class ConnectionFailure(ClickHouseORMError):
    """The ClickHouse client could not be created."""


class AuthenticationFailure(ClickHouseORMError):
    """The connection test query failed."""


class QueryExecutionFailed(ClickHouseORMError):
    """The client rejected the SQL or the request failed in transit."""


class InsertFailed(ClickHouseORMError):
    """An insert could not be completed."""


class SchemaError(ClickHouseORMError):
    """A DDL statement (CREATE / DROP / ALTER) failed."""


class MissingDataType(ClickHouseORMError):
    """A column definition has no resolvable data type."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Data type is required for field {field_name}")


class UnknownAssociation(ClickHouseORMError):
    """An association lookup did not match any declared relationship or model."""


class UnknownOperator(ClickHouseORMError, ValueError):
    """A filter used an operator tag with no SQL rendering."""

    def __init__(self, field: str, operator: str):
        self.field = field
        self.operator = operator
        super().__init__(f"Unknown operator '{operator}' for field '{field}'")
