from collections.abc import Sequence
from typing import Any

from typing_extensions import TypeAlias

__all__ = ("StatementParameters",)

StatementParameters: TypeAlias = Sequence[Any]
"""Ordered positional parameters bound to a statement."""
