"""Execution dispatch for built statements.

A statement runs against exactly one of two targets: a connection
:class:`Pool` or an active :class:`Transaction`. Both expose a single
``exec`` capability; the dispatcher checks the target, optionally logs the
statement, delegates, and interprets the driver result.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from sqlchain.config import ExecutionConfig
from sqlchain.exceptions import UninitializedTargetError, UnsupportedTargetError
from sqlchain.result import interpret_result
from sqlchain.typing import StatementParameters
from sqlchain.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlchain.protocols import NativeResult

__all__ = (
    "BLANK_POOL",
    "BLANK_TRANSACTION",
    "ExecutionTarget",
    "Pool",
    "TargetKind",
    "Transaction",
    "execute",
)

logger = get_logger("driver")


class TargetKind(str, Enum):
    """The two kinds of execution target."""

    POOL = "pool"
    TRANSACTION = "transaction"


class ExecutionTarget(ABC):
    """Base class for the places a statement can be executed.

    Only :class:`Pool` and :class:`Transaction` subclass this directly; new
    kinds of target are added here, not discovered by inspecting types.
    """

    __slots__ = ()

    kind: "ClassVar[TargetKind]"

    @property
    def is_blank(self) -> bool:
        """Whether this target is an unset placeholder."""
        return False

    @property
    def execution_config(self) -> "Optional[ExecutionConfig]":
        """Default logging configuration for statements run on this target."""
        return None

    @abstractmethod
    def exec(self, sql: str, parameters: "StatementParameters") -> "NativeResult":
        """Run a single statement and return the driver result."""
        raise NotImplementedError


class Pool(ExecutionTarget):
    """A pool of connections; each statement runs on a borrowed connection."""

    __slots__ = ()

    kind: "ClassVar[TargetKind]" = TargetKind.POOL


class Transaction(ExecutionTarget):
    """An open transaction; statements run on its connection without committing."""

    __slots__ = ()

    kind: "ClassVar[TargetKind]" = TargetKind.TRANSACTION


class _BlankPool(Pool):
    __slots__ = ()

    @property
    def is_blank(self) -> bool:
        return True

    def exec(self, sql: str, parameters: "StatementParameters") -> "NativeResult":
        raise UninitializedTargetError

    def __repr__(self) -> str:
        return "BLANK_POOL"


class _BlankTransaction(Transaction):
    __slots__ = ()

    @property
    def is_blank(self) -> bool:
        return True

    def exec(self, sql: str, parameters: "StatementParameters") -> "NativeResult":
        raise UninitializedTargetError

    def __repr__(self) -> str:
        return "BLANK_TRANSACTION"


BLANK_POOL: Pool = _BlankPool()
"""Placeholder for a pool that has not been initialized."""
BLANK_TRANSACTION: Transaction = _BlankTransaction()
"""Placeholder for a transaction that has not been started."""


def execute(
    target: "Optional[Union[Pool, Transaction]]",
    sql: str,
    parameters: "StatementParameters" = (),
    *,
    config: "Optional[ExecutionConfig]" = None,
) -> int:
    """Execute a write statement and return its affected count.

    Args:
        target: The pool or transaction to run the statement on.
        sql: The statement text.
        parameters: Positional parameters, one per placeholder in ``sql``.
        config: Logging configuration for this call, overriding the target's default.

    Raises:
        UninitializedTargetError: If ``target`` is unset or a blank placeholder.
        UnsupportedTargetError: If ``target`` is neither a pool nor a transaction.

    Returns:
        Rows affected for updates and deletes, the last generated identifier
        for inserts and replaces.
    """
    if target is None or (isinstance(target, ExecutionTarget) and target.is_blank):
        raise UninitializedTargetError
    if not isinstance(target, (Pool, Transaction)):
        raise UnsupportedTargetError(target)

    parameters = tuple(parameters)
    config = ExecutionConfig.merge(target.execution_config, config)
    if config.log_statements:
        config.resolve_logger().log(
            config.log_level,
            "Executing statement on %s: %s parameters=%s",
            target.kind.value,
            sql,
            list(parameters),
            extra={"extra_fields": {"target": target.kind.value, "sql": sql, "parameters": list(parameters)}},
        )

    result = target.exec(sql, parameters)
    affected = interpret_result(sql, result)
    logger.debug("Statement on %s returned %d", target.kind.value, affected)
    return affected
