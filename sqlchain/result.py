"""Interpretation of a write statement's driver result.

What "affected" means depends on the statement: an ``UPDATE`` or ``DELETE``
reports how many rows it changed, an ``INSERT`` or ``REPLACE`` reports the
identifier it generated. The kind is sniffed from the statement's leading
keyword. This is a lexical heuristic, not a parser: leading comments and
multi-statement batches are not special-cased.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlchain.exceptions import UnsupportedStatementKindError

if TYPE_CHECKING:
    from sqlchain.protocols import NativeResult

__all__ = ("StatementKind", "classify_statement", "interpret_result")


class StatementKind(str, Enum):
    """Write statement kinds with a known affected-count interpretation."""

    UPDATE = "update"
    DELETE = "delete"
    INSERT = "insert"
    REPLACE = "replace"

    @property
    def reports_rows_affected(self) -> bool:
        return self in {StatementKind.UPDATE, StatementKind.DELETE}

    def __str__(self) -> str:
        return self.value


def classify_statement(sql: str) -> StatementKind:
    """Classify a statement by its leading keyword.

    Args:
        sql: The statement text.

    Raises:
        UnsupportedStatementKindError: If the statement does not start with a known keyword.

    Returns:
        The statement kind.
    """
    normalized = sql.strip().lower()
    for kind in StatementKind:
        if normalized.startswith(kind.value):
            return kind
    raise UnsupportedStatementKindError(sql)


def interpret_result(sql: str, result: "NativeResult") -> int:
    """Pick the count a write statement's result stands for.

    Args:
        sql: The executed statement text.
        result: The driver result of executing ``sql``.

    Returns:
        Rows affected for updates and deletes, the last generated identifier
        for inserts and replaces.
    """
    if classify_statement(sql).reports_rows_affected:
        return result.rows_affected()
    return result.last_insert_id()
