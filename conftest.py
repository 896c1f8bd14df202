"""
Shared test fixtures.

The ClickHouse client is replaced by an in-memory fake injected through the
connection's client factory, so no server is needed.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

import pytest

from clickhouse_orm import ClickHouseORM
from clickhouse_orm.adapters.clickhouse import Connection
from clickhouse_orm.core.models import ConnectionConfig


class FakeQueryResult:
    """Shaped like clickhouse_connect's QueryResult."""

    def __init__(
        self,
        column_names: Sequence[str] = (),
        rows: Sequence[Sequence[Any]] = (),
        column_types: Optional[Sequence[str]] = None,
        summary: Optional[Dict[str, Any]] = None,
    ):
        self.column_names = tuple(column_names)
        self.result_rows = [tuple(row) for row in rows]
        types = column_types or ["String"] * len(self.column_names)
        self.column_types = [SimpleNamespace(name=t) for t in types]
        self.summary = summary or {}


class FakeClient:
    """Records every call and replays queued responses."""

    def __init__(self):
        self.queries: List[Dict[str, Any]] = []
        self.raw_queries: List[Dict[str, Any]] = []
        self.commands: List[str] = []
        self.inserts: List[Dict[str, Any]] = []
        self.responses: List[Any] = []
        self.command_error: Optional[Exception] = None
        self.insert_error: Optional[Exception] = None
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def query(self, query: str, parameters: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        self.queries.append({"query": query, "parameters": parameters})
        if not self.responses:
            return FakeQueryResult()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def raw_query(self, query: str, parameters: Optional[Dict[str, Any]] = None, fmt: Optional[str] = None, **kwargs: Any) -> bytes:
        self.raw_queries.append({"query": query, "parameters": parameters, "fmt": fmt})
        return b"id,name\n1,alice\n"

    async def command(self, cmd: str, parameters: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        self.commands.append(cmd)
        if self.command_error is not None:
            raise self.command_error
        return None

    async def insert(self, table: str, data: Any, column_names: Any = "*", **kwargs: Any) -> Any:
        if self.insert_error is not None:
            raise self.insert_error
        self.inserts.append({"table": table, "data": data, "column_names": column_names, **kwargs})
        return SimpleNamespace(written_rows=len(data))

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def client_factory(fake_client):
    calls: List[Dict[str, Any]] = []

    async def factory(**kwargs: Any) -> FakeClient:
        calls.append(kwargs)
        return fake_client

    factory.calls = calls
    return factory


@pytest.fixture
def config() -> ConnectionConfig:
    return ConnectionConfig(host="localhost", port=8123, database="test_orm")


@pytest.fixture
def connection(config, client_factory) -> Connection:
    return Connection(config, client_factory=client_factory)


@pytest.fixture
def orm(config, client_factory) -> ClickHouseORM:
    return ClickHouseORM(config, client_factory=client_factory)
