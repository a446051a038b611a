"""PostgreSQL execution targets over a psycopg connection pool."""

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypedDict

from typing_extensions import NotRequired

from sqlchain.adapters.dbapi import DBAPIPool, DBAPITransaction
from sqlchain.exceptions import MissingDependencyError
from sqlchain.parameters import ParameterStyle
from sqlchain.statement import Fragment, Statement

if TYPE_CHECKING:
    from collections.abc import Generator

    from psycopg_pool import ConnectionPool

    from sqlchain.config import ExecutionConfig

logger = logging.getLogger(__name__)

__all__ = ("PsycopgConfig", "PsycopgPoolParams")


class PsycopgPoolParams(TypedDict, total=False):
    """Parameters for ``psycopg_pool.ConnectionPool``."""

    conninfo: NotRequired[str]
    kwargs: "NotRequired[dict[str, Any]]"
    min_size: NotRequired[int]
    max_size: "NotRequired[int | None]"
    name: "NotRequired[str | None]"
    timeout: NotRequired[float]
    max_waiting: NotRequired[int]
    max_lifetime: NotRequired[float]
    max_idle: NotRequired[float]
    reconnect_timeout: NotRequired[float]
    num_workers: NotRequired[int]


class PsycopgConfig:
    """Configuration for psycopg pooled connections.

    Statements are rendered with ``%s`` placeholders, the positional style
    psycopg binds. psycopg does not report generated identifiers, so inserts
    executed through these targets raise
    :class:`~sqlchain.exceptions.ResultUnavailableError` when asked for one.
    """

    parameter_style = ParameterStyle.POSITIONAL_PYFORMAT

    def __init__(
        self,
        *,
        pool_config: "PsycopgPoolParams | dict[str, Any] | None" = None,
        pool_instance: "ConnectionPool | None" = None,
        execution_config: "ExecutionConfig | None" = None,
    ) -> None:
        self.pool_config: dict[str, Any] = dict(pool_config or {})
        self.pool_instance = pool_instance
        self.execution_config = execution_config
        self._target: "DBAPIPool | None" = None

    def _create_pool(self) -> "ConnectionPool":
        try:
            from psycopg_pool import ConnectionPool
        except ImportError as e:
            raise MissingDependencyError(package="psycopg_pool", install_package="psycopg") from e

        logger.info("Creating psycopg connection pool", extra={"adapter": "psycopg"})
        try:
            pool = ConnectionPool(open=True, **self.pool_config)
        except Exception:
            logger.exception("Failed to create psycopg connection pool", extra={"adapter": "psycopg"})
            raise
        return pool

    def provide_native_pool(self) -> "ConnectionPool":
        if self.pool_instance is None:
            self.pool_instance = self._create_pool()
        return self.pool_instance

    def create_pool(self) -> DBAPIPool:
        return DBAPIPool(self.provide_native_pool().connection, self.execution_config)

    def provide_pool(self) -> DBAPIPool:
        if self._target is None:
            self._target = self.create_pool()
        return self._target

    def close_pool(self) -> None:
        if self.pool_instance is not None:
            logger.info("Closing psycopg connection pool", extra={"adapter": "psycopg"})
            self.pool_instance.close()
        self.pool_instance = None
        self._target = None

    @contextmanager
    def provide_transaction(self) -> "Generator[DBAPITransaction, None, None]":
        """Provide a transaction that commits on success and rolls back on error.

        Yields:
            The transaction target.
        """
        with self.provide_pool().transaction() as transaction:
            yield transaction

    def fragment(self, sql: str, *parameters: Any) -> Statement:
        """Start a statement in psycopg's placeholder style."""
        return Fragment(sql).add_parameters(*parameters, style=self.parameter_style)
