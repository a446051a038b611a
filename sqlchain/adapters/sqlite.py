"""SQLite execution targets built on the standard library driver."""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypedDict

from typing_extensions import NotRequired

from sqlchain.adapters.dbapi import DBAPIPool, DBAPITransaction
from sqlchain.parameters import ParameterStyle
from sqlchain.statement import Fragment, Statement

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlchain.config import ExecutionConfig

logger = logging.getLogger(__name__)

__all__ = ("SqliteConfig", "SqliteConnectionParams")


class SqliteConnectionParams(TypedDict, total=False):
    """SQLite connection parameters."""

    database: NotRequired[str]
    timeout: NotRequired[float]
    detect_types: NotRequired[int]
    isolation_level: "NotRequired[str | None]"
    check_same_thread: NotRequired[bool]
    cached_statements: NotRequired[int]
    uri: NotRequired[bool]


class SqliteConfig:
    """SQLite configuration producing pool and transaction targets.

    SQLite has no native pool, so the pool opens a connection per statement.
    An in-memory database is turned into a named shared-cache database that
    stays alive while the pool is open.
    """

    parameter_style = ParameterStyle.QMARK

    def __init__(
        self,
        *,
        connection_config: "SqliteConnectionParams | dict[str, Any] | None" = None,
        execution_config: "ExecutionConfig | None" = None,
    ) -> None:
        """Initialize SQLite configuration.

        Args:
            connection_config: Keyword arguments for :func:`sqlite3.connect`.
            execution_config: Default logging configuration for statements run on the pool.
        """
        connection_config = dict(connection_config or {})
        if connection_config.get("database", ":memory:") == ":memory:":
            connection_config["database"] = f"file:memory_{uuid.uuid4().hex}?mode=memory&cache=shared"
            connection_config["uri"] = True
            connection_config.setdefault("check_same_thread", False)
        elif str(connection_config["database"]).startswith("file:") and not connection_config.get("uri"):
            logger.debug(
                "Database URI detected (%s) but uri=True not set, enabling URI mode.", connection_config["database"]
            )
            connection_config["uri"] = True
        self.connection_config: dict[str, Any] = connection_config
        self.execution_config = execution_config
        self.pool_instance: "DBAPIPool | None" = None
        self._anchor: "sqlite3.Connection | None" = None

    @property
    def is_memory(self) -> bool:
        return "mode=memory" in str(self.connection_config["database"])

    def create_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(**self.connection_config)

    @contextmanager
    def provide_connection(self) -> "Generator[sqlite3.Connection, None, None]":
        """Provide a SQLite connection that is closed when the block exits.

        Yields:
            A new connection.
        """
        connection = self.create_connection()
        try:
            yield connection
        finally:
            connection.close()

    def create_pool(self) -> DBAPIPool:
        if self.is_memory and self._anchor is None:
            self._anchor = self.create_connection()
        return DBAPIPool(self.provide_connection, self.execution_config)

    def provide_pool(self) -> DBAPIPool:
        if self.pool_instance is None:
            self.pool_instance = self.create_pool()
        return self.pool_instance

    def close_pool(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
        self.pool_instance = None

    @contextmanager
    def provide_transaction(self) -> "Generator[DBAPITransaction, None, None]":
        """Provide a transaction that commits on success and rolls back on error.

        Yields:
            The transaction target.
        """
        with self.provide_pool().transaction() as transaction:
            yield transaction

    def fragment(self, sql: str, *parameters: Any) -> Statement:
        """Start a statement in SQLite's placeholder style."""
        return Fragment(sql).add_parameters(*parameters, style=self.parameter_style)
