"""
Tests for the connection, execution adapter and ORM handle.
"""

import asyncio

import pytest

from clickhouse_orm import ClickHouseORM
from clickhouse_orm.adapters.clickhouse import Connection
from clickhouse_orm.core.errors import (
    AuthenticationFailure,
    ConnectionFailure,
    InsertFailed,
    QueryExecutionFailed,
)
from clickhouse_orm.core.models import ConnectionConfig, QueryResult
from clickhouse_orm.execution import QueryExecutor, ResultFormatter
from conftest import FakeQueryResult


def test_config_defaults():
    config = ConnectionConfig()
    assert (config.host, config.port, config.username, config.password, config.database) == (
        "localhost", 8123, "default", "", "default"
    )
    assert config.url == "http://localhost:8123"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("CLICKHOUSE_HOST", "ch.internal")
    monkeypatch.setenv("CLICKHOUSE_PORT", "8443")
    monkeypatch.setenv("CLICKHOUSE_USER", "reader")
    monkeypatch.setenv("CLICKHOUSE_SECURE", "true")
    monkeypatch.delenv("CLICKHOUSE_PASSWORD", raising=False)
    monkeypatch.delenv("CLICKHOUSE_DATABASE", raising=False)

    config = ConnectionConfig.from_env(database="analytics")

    assert config.host == "ch.internal"
    assert config.port == 8443
    assert config.username == "reader"
    assert config.secure is True
    assert config.database == "analytics"
    assert config.url == "https://ch.internal:8443"


def test_connection_accepts_dict_config(client_factory):
    connection = Connection({"host": "db", "port": 9000}, client_factory=client_factory)
    assert connection.config == ConnectionConfig(host="db", port=9000)


def test_client_created_once(connection, client_factory, fake_client):
    assert not connection.is_connected

    first = asyncio.run(connection.connect())
    second = asyncio.run(connection.connect())

    assert first is second is fake_client
    assert len(client_factory.calls) == 1
    assert client_factory.calls[0]["host"] == "localhost"
    assert client_factory.calls[0]["database"] == "test_orm"


def test_connect_failure_wrapped(config):
    async def failing_factory(**kwargs):
        raise OSError("connection refused")

    connection = Connection(config, client_factory=failing_factory)

    with pytest.raises(ConnectionFailure) as exc_info:
        asyncio.run(connection.connect())

    assert str(exc_info.value) == "Failed to connect to ClickHouse: connection refused"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_authenticate(connection, fake_client):
    fake_client.queue(FakeQueryResult(["test"], [(1,)], column_types=["UInt8"]))

    result = asyncio.run(connection.authenticate())

    assert result.data == [{"test": 1}]
    assert result.meta == [{"name": "test", "type": "UInt8"}]
    assert fake_client.queries[0]["query"] == "SELECT 1 AS test"


def test_authenticate_failure_wrapped(connection, fake_client):
    fake_client.queue(RuntimeError("Authentication failed: password is incorrect"))

    with pytest.raises(AuthenticationFailure, match="^Authentication failed: "):
        asyncio.run(connection.authenticate())


def test_query_returns_rows(connection, fake_client):
    fake_client.queue(FakeQueryResult(["id", "name"], [(1, "alice"), (2, "bob")], summary={"read_rows": "2"}))

    result = asyncio.run(connection.query("SELECT id, name FROM users", params={"x": 1}))

    assert isinstance(result, QueryResult)
    assert result.data == [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]
    assert result.rows == 2
    assert result.statistics == {"read_rows": "2"}
    assert fake_client.queries[0]["parameters"] == {"x": 1}


def test_query_with_no_rows_has_empty_data(connection):
    result = asyncio.run(connection.query("SELECT * FROM empty"))
    assert result.data == []
    assert result.rows == 0


def test_query_failure_wrapped(orm, fake_client):
    fake_client.queue(RuntimeError("Syntax error: failed at position 1"))

    with pytest.raises(QueryExecutionFailed) as exc_info:
        asyncio.run(orm.query("INVALID SQL STATEMENT"))

    assert "Query execution failed" in str(exc_info.value)
    assert "Syntax error" in str(exc_info.value)


def test_query_raw_format(connection, fake_client):
    body = asyncio.run(connection.query("SELECT * FROM users", fmt="CSVWithNames"))

    assert body == b"id,name\n1,alice\n"
    assert fake_client.raw_queries[0]["fmt"] == "CSVWithNames"
    assert fake_client.queries == []


def test_executor_raw(connection, fake_client):
    executor = QueryExecutor(connection)
    body = asyncio.run(executor.execute_raw("SELECT 1", fmt="TabSeparated"))
    assert body.startswith(b"id,name")


def test_insert_failure_wrapped(connection, fake_client):
    fake_client.insert_error = RuntimeError("Code: 60. Table default.missing does not exist")

    with pytest.raises(InsertFailed, match="^Insert failed: Code: 60"):
        asyncio.run(connection.insert("missing", {"id": 1}))


def test_insert_passes_settings(connection, fake_client):
    asyncio.run(connection.insert("events", [{"a": 1}], settings={"async_insert": 1}))
    assert fake_client.inserts[0]["settings"] == {"async_insert": 1}


def test_close(connection, fake_client):
    asyncio.run(connection.close())
    assert not fake_client.closed

    asyncio.run(connection.connect())
    asyncio.run(connection.close())

    assert fake_client.closed
    assert not connection.is_connected


def test_orm_context_manager_closes(config, client_factory, fake_client):
    async def run():
        async with ClickHouseORM(config, client_factory=client_factory) as orm:
            await orm.authenticate()

    asyncio.run(run())
    assert fake_client.closed


def test_orm_query_builder_executes(orm, fake_client):
    fake_client.queue(FakeQueryResult(["name"], [("alice",)]))

    query = orm.create_query_builder().select(["name"]).from_("users").where({"id": [1, 2]})
    result = asyncio.run(query.execute())

    assert result.data == [{"name": "alice"}]
    assert fake_client.queries[0]["query"] == "SELECT name FROM users WHERE id IN ('1', '2')"


def test_result_formatter_dicts_to_rows():
    columns, rows = ResultFormatter.dicts_to_rows([{"a": 1, "b": 2}, {"c": 3, "a": 4}])
    assert columns == ["a", "b", "c"]
    assert rows == [[1, 2, None], [4, None, 3]]
