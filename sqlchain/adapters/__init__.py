"""Execution targets for concrete database drivers."""

from sqlchain.adapters.dbapi import CursorResult, DBAPIPool, DBAPITransaction

__all__ = ("CursorResult", "DBAPIPool", "DBAPITransaction")
