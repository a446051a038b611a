"""Immutable SQL statements assembled from fragments.

A :class:`Statement` pairs SQL text with its ordered positional parameters.
Every builder method returns a new statement and copies the parameters, so a
common prefix can be branched into several variants safely, including from
different threads.

Example:
    >>> stmt = Fragment("select * from users").add_parameters()
    >>> stmt.where_in("id", ["1", "2", "3"]).limit(10).sql
    'select * from users where id in ($1,$2,$3)  limit 10'
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from sqlchain.driver import execute
from sqlchain.exceptions import EmptyBatchError
from sqlchain.parameters import DEFAULT_PARAMETER_STYLE, ParameterStyle, encode_batch

if TYPE_CHECKING:
    from sqlchain.config import ExecutionConfig
    from sqlchain.driver import Pool, Transaction

__all__ = ("Fragment", "Statement")


class Fragment(str):
    """A piece of SQL text with no parameters bound yet."""

    __slots__ = ()

    def add_parameters(self, *parameters: Any, style: ParameterStyle = DEFAULT_PARAMETER_STYLE) -> "Statement":
        """Promote the fragment to a statement with the given parameters."""
        return Statement(str(self), parameters, style)

    def exec(
        self, target: "Optional[Union[Pool, Transaction]]", config: "Optional[ExecutionConfig]" = None
    ) -> int:
        """Execute the fragment as a statement with no parameters."""
        return self.add_parameters().exec(target, config=config)


@dataclass(frozen=True, slots=True)
class Statement:
    """An immutable SQL statement with its positional parameters."""

    sql: str
    """The SQL text."""
    parameters: "tuple[Any, ...]" = field(default=())
    """Positional parameters, in placeholder order."""
    parameter_style: ParameterStyle = DEFAULT_PARAMETER_STYLE
    """Placeholder syntax used when clauses add parameters."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters) if self.parameters is not None else ())
        object.__setattr__(self, "parameter_style", ParameterStyle(self.parameter_style))

    @classmethod
    def from_fragment(cls, sql: str, style: ParameterStyle = DEFAULT_PARAMETER_STYLE) -> "Statement":
        """Create a statement with no parameters."""
        return cls(sql, (), style)

    @classmethod
    def new(cls, sql: str, *parameters: Any, style: ParameterStyle = DEFAULT_PARAMETER_STYLE) -> "Statement":
        """Create a statement from SQL text and positional parameters."""
        return cls(sql, parameters, style)

    @property
    def next_index(self) -> int:
        """Position the next added parameter will take."""
        return len(self.parameters) + 1

    def concat(self, other: "Statement") -> "Statement":
        """Append another statement's text and parameters.

        The placeholder style of this statement is kept.

        Args:
            other: The statement to append.

        Returns:
            A new statement.
        """
        return Statement(self.sql + other.sql, (*self.parameters, *other.parameters), self.parameter_style)

    def __add__(self, other: object) -> "Statement":
        if not isinstance(other, Statement):
            return NotImplemented
        return self.concat(other)

    def where_in(self, key: str, values: "Iterable[Any]") -> "Statement":
        """Append a ``where <key> in (...)`` clause.

        Placeholders continue numbering after the existing parameters. No check
        is made for an existing ``WHERE``.

        Args:
            key: The column or expression to match, used verbatim.
            values: The values to bind.

        Raises:
            EmptyBatchError: If ``values`` is empty.
            TypeError: If ``values`` is a single string.

        Returns:
            A new statement.
        """
        return self._append_in("where", key, values)

    def and_where_in(self, key: str, values: "Iterable[Any]") -> "Statement":
        """Append an ``and <key> in (...)`` clause after an existing ``WHERE``.

        Raises:
            EmptyBatchError: If ``values`` is empty.
            TypeError: If ``values`` is a single string.
        """
        return self._append_in("and", key, values)

    def _append_in(self, keyword: str, key: str, values: "Iterable[Any]") -> "Statement":
        if isinstance(values, (str, bytes)):
            msg = f"Values for the IN clause on {key!r} must be a collection, not a single {type(values).__name__}"
            raise TypeError(msg)
        placeholders, parameters = encode_batch(values, self.next_index, self.parameter_style)
        if not parameters:
            raise EmptyBatchError(key)
        return self.concat(Statement(f" {keyword} {key} in {placeholders} ", parameters, self.parameter_style))

    def limit(self, limit: int) -> "Statement":
        return self._append_text(f" limit {limit}")

    def offset(self, offset: int) -> "Statement":
        return self._append_text(f" offset {offset}")

    def order_by(self, order: str) -> "Statement":
        """Append an ``order by`` clause.

        ``order`` is inserted verbatim and must come from trusted code, never
        from user input.
        """
        return self._append_text(f" order by {order}")

    def _append_text(self, text: str) -> "Statement":
        return Statement(self.sql + text, self.parameters, self.parameter_style)

    def describe(self) -> str:
        """Render the statement for debug logging."""
        return f"sql= {self.sql}\n parameters={list(self.parameters)}"

    def exec(
        self, target: "Optional[Union[Pool, Transaction]]", config: "Optional[ExecutionConfig]" = None
    ) -> int:
        """Execute the statement on a pool or transaction.

        Args:
            target: Where to run the statement.
            config: Logging configuration for this call.

        Returns:
            Rows affected for updates and deletes, the last generated identifier
            for inserts and replaces.
        """
        return execute(target, self.sql, self.parameters, config=config)
