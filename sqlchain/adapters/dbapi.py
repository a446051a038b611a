"""Execution targets over PEP 249 (DB-API) drivers."""

from __future__ import annotations

import contextlib
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlchain.driver import Pool, Transaction
from sqlchain.exceptions import ResultUnavailableError
from sqlchain.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Sequence
    from contextlib import AbstractContextManager

    from sqlchain.config import ExecutionConfig
    from sqlchain.protocols import DBAPIConnection, DBAPICursor

__all__ = ("CursorResult", "DBAPIPool", "DBAPITransaction", "run_on_connection")

logger = get_logger("adapters.dbapi")


class CursorResult:
    """Counts captured from a cursor right after it executed a statement."""

    __slots__ = ("_last_row_id", "_row_count")

    def __init__(self, row_count: int, last_row_id: Any = None) -> None:
        self._row_count = row_count
        self._last_row_id = last_row_id

    @classmethod
    def from_cursor(cls, cursor: DBAPICursor) -> CursorResult:
        return cls(getattr(cursor, "rowcount", -1), getattr(cursor, "lastrowid", None))

    def rows_affected(self) -> int:
        """Number of rows changed by the statement.

        Raises:
            ResultUnavailableError: If the driver reported no row count.
        """
        if self._row_count is None or self._row_count < 0:
            msg = "The driver did not report a row count for this statement."
            raise ResultUnavailableError(msg)
        return int(self._row_count)

    def last_insert_id(self) -> int:
        """Identifier generated by the statement.

        Raises:
            ResultUnavailableError: If the driver reported no generated identifier.
        """
        if self._last_row_id is None:
            msg = "The driver did not report a generated identifier. Use RETURNING and a query instead."
            raise ResultUnavailableError(msg)
        return int(self._last_row_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(row_count={self._row_count!r}, last_row_id={self._last_row_id!r})"


def run_on_connection(connection: DBAPIConnection, sql: str, parameters: Sequence[Any]) -> CursorResult:
    """Execute one statement on a fresh cursor and capture its counts."""
    cursor = connection.cursor()
    try:
        if parameters:
            cursor.execute(sql, tuple(parameters))
        else:
            # an empty container puts psycopg into parameterized mode
            cursor.execute(sql)
        return CursorResult.from_cursor(cursor)
    finally:
        with contextlib.suppress(Exception):
            cursor.close()


class DBAPITransaction(Transaction):
    """A transaction on an open connection.

    Statements run without committing; the owner of the connection decides
    when to commit or roll back.
    """

    __slots__ = ("_execution_config", "connection")

    def __init__(self, connection: DBAPIConnection, execution_config: ExecutionConfig | None = None) -> None:
        self.connection = connection
        self._execution_config = execution_config

    @property
    def execution_config(self) -> ExecutionConfig | None:
        return self._execution_config

    def exec(self, sql: str, parameters: Sequence[Any]) -> CursorResult:
        return run_on_connection(self.connection, sql, parameters)

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()


class DBAPIPool(Pool):
    """A pool that lends connections through a context manager factory.

    ``provide_connection`` is any callable returning a context manager that
    yields a DB-API connection, such as ``psycopg_pool.ConnectionPool.connection``.
    Each ``exec`` borrows one connection, runs the statement and commits.
    ``execution_config`` is the default logging configuration for statements
    run on the pool and on transactions it opens.
    """

    __slots__ = ("_execution_config", "provide_connection")

    def __init__(
        self,
        provide_connection: Callable[[], AbstractContextManager[DBAPIConnection]],
        execution_config: ExecutionConfig | None = None,
    ) -> None:
        self.provide_connection = provide_connection
        self._execution_config = execution_config

    @property
    def execution_config(self) -> ExecutionConfig | None:
        return self._execution_config

    def exec(self, sql: str, parameters: Sequence[Any]) -> CursorResult:
        with self.provide_connection() as connection:
            result = run_on_connection(connection, sql, parameters)
            connection.commit()
            return result

    @contextmanager
    def transaction(self) -> Generator[DBAPITransaction, None, None]:
        """Run several statements on one connection as a single transaction.

        Commits when the block exits normally and rolls back when it raises.

        Yields:
            The transaction to execute statements on.
        """
        with self.provide_connection() as connection:
            transaction = DBAPITransaction(connection, self._execution_config)
            try:
                yield transaction
            except Exception:
                logger.debug("Rolling back transaction after error")
                try:
                    transaction.rollback()
                except Exception:
                    logger.warning("Rollback failed, re-raising the original error", exc_info=True)
                raise
            transaction.commit()
