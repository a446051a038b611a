from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from sqlchain.driver import Pool, Transaction

if TYPE_CHECKING:
    from collections.abc import Sequence

here = Path(__file__).parent
root_path = here.parent


class StubResult:
    """Driver result reporting fixed counts."""

    def __init__(self, rows_affected: int = 0, last_insert_id: int = 0) -> None:
        self._rows_affected = rows_affected
        self._last_insert_id = last_insert_id

    def rows_affected(self) -> int:
        return self._rows_affected

    def last_insert_id(self) -> int:
        return self._last_insert_id


class RecordingPool(Pool):
    """Pool that records every call and answers with a fixed result."""

    __slots__ = ("calls", "result")

    def __init__(self, result: StubResult) -> None:
        self.result = result
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def exec(self, sql: str, parameters: Sequence[Any]) -> StubResult:
        self.calls.append((sql, tuple(parameters)))
        return self.result


class RecordingTransaction(Transaction):
    """Transaction that records every call and answers with a fixed result."""

    __slots__ = ("calls", "result")

    def __init__(self, result: StubResult) -> None:
        self.result = result
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def exec(self, sql: str, parameters: Sequence[Any]) -> StubResult:
        self.calls.append((sql, tuple(parameters)))
        return self.result


@pytest.fixture
def stub_result() -> StubResult:
    return StubResult(rows_affected=3, last_insert_id=42)


@pytest.fixture
def recording_pool(stub_result: StubResult) -> RecordingPool:
    return RecordingPool(stub_result)


@pytest.fixture
def recording_transaction(stub_result: StubResult) -> RecordingTransaction:
    return RecordingTransaction(stub_result)
