from typing import Any, Optional

__all__ = (
    "EmptyBatchError",
    "MissingDependencyError",
    "ResultUnavailableError",
    "SQLBuilderError",
    "SQLChainError",
    "UninitializedTargetError",
    "UnsupportedStatementKindError",
    "UnsupportedTargetError",
)


class SQLChainError(Exception):
    """Base exception class from which all sqlchain exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLChainError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SQLChainError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlchain[{install_package or package}]' to install sqlchain with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class SQLBuilderError(SQLChainError):
    """Issues building a SQL statement."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class EmptyBatchError(SQLBuilderError):
    """An ``IN`` clause was requested with no values to bind."""

    key: str

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cannot build an IN clause for {key!r} from an empty list of values")


# -- Execution Errors --
class UninitializedTargetError(SQLChainError):
    """Execution was attempted against an unset pool or transaction."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Cannot execute statement, the pool or transaction has not been initialized."
        super().__init__(message)


class UnsupportedTargetError(SQLChainError):
    """Execution target is neither a pool nor a transaction."""

    target_type: str

    def __init__(self, target: Any) -> None:
        self.target_type = type(target).__name__
        super().__init__(f"Only Pool and Transaction targets are supported, got {self.target_type}")


class UnsupportedStatementKindError(SQLChainError):
    """The statement's leading keyword has no affected-count interpretation."""

    sql: str

    def __init__(self, sql: str) -> None:
        self.sql = sql
        super().__init__(f"Only update, insert, delete and replace statements are supported.\nSQL: {sql}")


class ResultUnavailableError(SQLChainError):
    """The driver result cannot report the requested count."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "The driver did not report a usable result."
        super().__init__(message)
