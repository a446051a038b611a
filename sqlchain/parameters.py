"""Placeholder rendering for positional parameters.

Statements are rendered in a single positional placeholder style. ``NUMERIC``
(``$1``, ``$2``, ...) is the default and matches the PostgreSQL convention;
the other styles exist for drivers that expect a different syntax.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

__all__ = ("DEFAULT_PARAMETER_STYLE", "ParameterStyle", "encode_batch", "render_placeholder")


class ParameterStyle(str, Enum):
    """Parameter style enumeration with string values."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    POSITIONAL_COLON = "positional_colon"
    POSITIONAL_PYFORMAT = "pyformat_positional"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


DEFAULT_PARAMETER_STYLE = ParameterStyle.NUMERIC

_PLACEHOLDER_TEMPLATES: "dict[ParameterStyle, str]" = {
    ParameterStyle.QMARK: "?",
    ParameterStyle.NUMERIC: "${index}",
    ParameterStyle.POSITIONAL_COLON: ":{index}",
    ParameterStyle.POSITIONAL_PYFORMAT: "%s",
}


def render_placeholder(index: int, style: ParameterStyle = DEFAULT_PARAMETER_STYLE) -> str:
    """Render a single placeholder for a 1-based parameter position.

    Args:
        index: Position of the parameter in the statement, starting at 1.
        style: Placeholder syntax to render.

    Returns:
        The placeholder text.
    """
    return _PLACEHOLDER_TEMPLATES[ParameterStyle(style)].format(index=index)


def encode_batch(
    values: "Iterable[Any]", start_index: int, style: ParameterStyle = DEFAULT_PARAMETER_STYLE
) -> "tuple[str, tuple[Any, ...]]":
    """Build a parenthesized placeholder list for a batch ``IN`` clause.

    Each value becomes exactly one positional parameter, in order and without
    coercion. An empty batch yields an empty string rather than ``()``.

    Args:
        values: Values to bind.
        start_index: Position of the first placeholder.
        style: Placeholder syntax to render.

    Returns:
        The placeholder list and the matching parameters.

    Example:
        >>> encode_batch(["a", "b", "c"], 5)
        ('($5,$6,$7)', ('a', 'b', 'c'))
    """
    parameters = tuple(values)
    if not parameters:
        return "", ()
    placeholders = ",".join(render_placeholder(start_index + offset, style) for offset in range(len(parameters)))
    return f"({placeholders})", parameters
