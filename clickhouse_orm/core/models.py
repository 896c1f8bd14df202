"""
Shared data models for the ORM.
"""

import os
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class QueryResult(BaseModel):
    """Standardized query result format."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    meta: List[Dict[str, str]] = Field(default_factory=list)
    rows: int = 0
    statistics: Dict[str, Any] = Field(default_factory=dict)


class ConnectionConfig(BaseModel):
    """Configuration for the ClickHouse connection."""

    host: str = "localhost"
    port: int = 8123
    username: str = "default"
    password: str = ""
    database: str = "default"
    secure: bool = False
    settings: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ConnectionConfig":
        """
        Build configuration from environment variables.

        Reads a local .env file first, then:
        - CLICKHOUSE_HOST
        - CLICKHOUSE_PORT
        - CLICKHOUSE_USER
        - CLICKHOUSE_PASSWORD
        - CLICKHOUSE_DATABASE
        - CLICKHOUSE_SECURE

        Args:
            **overrides: Explicit values that win over the environment

        Returns:
            Populated ConnectionConfig
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        env_map = {
            "host": "CLICKHOUSE_HOST",
            "port": "CLICKHOUSE_PORT",
            "username": "CLICKHOUSE_USER",
            "password": "CLICKHOUSE_PASSWORD",
            "database": "CLICKHOUSE_DATABASE",
            "secure": "CLICKHOUSE_SECURE",
        }
        for field_name, env_var in env_map.items():
            value = os.getenv(env_var)
            if value is not None:
                values[field_name] = value

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def url(self) -> str:
        """HTTP(S) endpoint of the server."""
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}:{self.port}"


class FindOptions(BaseModel):
    """Options accepted by the model finder methods."""

    model_config = ConfigDict(extra="forbid")

    attributes: Optional[List[str]] = None
    where: Optional[Union[str, Dict[str, Any]]] = None
    order_by: Optional[Union[str, List[Any]]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)
