"""Logging helpers for sqlchain.

All loggers live under the ``sqlchain`` namespace. Statement logs carry the
executed statement in ``extra={"extra_fields": {...}}``; :class:`StatementFormatter`
renders those records as one JSON document per line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlchain._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("ROOT_LOGGER_NAME", "STATEMENT_FIELDS", "StatementFormatter", "get_logger")

ROOT_LOGGER_NAME = "sqlchain"

STATEMENT_FIELDS = ("target", "sql", "parameters")
"""Keys of ``extra_fields`` that describe an executed statement."""


class StatementFormatter(logging.Formatter):
    """JSON formatter that groups statement fields under a ``statement`` key.

    Whitespace runs in the SQL are collapsed so multi-line statements stay on
    one log line. Other ``extra_fields`` are copied to the top level.
    """

    def format(self, record: LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] = dict(getattr(record, "extra_fields", None) or {})
        statement = {key: extra_fields.pop(key) for key in STATEMENT_FIELDS if key in extra_fields}
        if statement:
            if "sql" in statement:
                statement["sql"] = " ".join(str(statement["sql"]).split())
            if "parameters" in statement:
                statement["parameters"] = list(statement["parameters"])
                statement["parameter_count"] = len(statement["parameters"])
            log_entry["statement"] = statement
        log_entry.update(extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return encode_json(log_entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``sqlchain`` namespace.

    Args:
        name: Logger name. If not provided, returns the root sqlchain logger.

    Returns:
        The logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
