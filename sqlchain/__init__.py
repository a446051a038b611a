"""sqlchain: fluent parameterized SQL statements for pools and transactions."""

from sqlchain import adapters, exceptions, parameters, result, utils
from sqlchain.__metadata__ import __version__
from sqlchain.config import ExecutionConfig
from sqlchain.driver import BLANK_POOL, BLANK_TRANSACTION, ExecutionTarget, Pool, TargetKind, Transaction, execute
from sqlchain.exceptions import (
    EmptyBatchError,
    ResultUnavailableError,
    SQLBuilderError,
    SQLChainError,
    UninitializedTargetError,
    UnsupportedStatementKindError,
    UnsupportedTargetError,
)
from sqlchain.parameters import ParameterStyle, encode_batch
from sqlchain.result import StatementKind, classify_statement, interpret_result
from sqlchain.statement import Fragment, Statement

__all__ = (
    "BLANK_POOL",
    "BLANK_TRANSACTION",
    "EmptyBatchError",
    "ExecutionConfig",
    "ExecutionTarget",
    "Fragment",
    "ParameterStyle",
    "Pool",
    "ResultUnavailableError",
    "SQLBuilderError",
    "SQLChainError",
    "Statement",
    "StatementKind",
    "TargetKind",
    "Transaction",
    "UninitializedTargetError",
    "UnsupportedStatementKindError",
    "UnsupportedTargetError",
    "__version__",
    "adapters",
    "classify_statement",
    "encode_batch",
    "exceptions",
    "execute",
    "interpret_result",
    "parameters",
    "result",
    "utils",
)
