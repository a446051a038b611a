"""Runtime-checkable protocols for the objects sqlchain consumes.

These describe the driver-side capabilities a statement is executed through:
the native result of a single ``exec`` and the PEP 249 connection and cursor
surfaces the DB-API adapters wrap.
"""

from collections.abc import Sequence
from typing import Any, Optional, Protocol, runtime_checkable

__all__ = ("DBAPIConnection", "DBAPICursor", "NativeResult")


@runtime_checkable
class NativeResult(Protocol):
    """Protocol for the driver result of a single ``exec`` call."""

    def rows_affected(self) -> int:
        """Number of rows changed by the statement."""
        ...

    def last_insert_id(self) -> int:
        """Identifier generated by the statement."""
        ...


@runtime_checkable
class DBAPICursor(Protocol):
    """Protocol for PEP 249 cursors."""

    rowcount: int
    lastrowid: Optional[Any]

    def execute(self, operation: Any, parameters: Sequence[Any] = ...) -> Any:
        """Execute a single operation."""
        ...

    def close(self) -> Any:
        """Close the cursor."""
        ...


@runtime_checkable
class DBAPIConnection(Protocol):
    """Protocol for PEP 249 connections."""

    def cursor(self) -> Any:
        """Open a new cursor."""
        ...

    def commit(self) -> Any:
        """Commit the current transaction."""
        ...

    def rollback(self) -> Any:
        """Roll back the current transaction."""
        ...
