"""Tests for the immutable statement builder."""

import threading
from dataclasses import FrozenInstanceError

import pytest

from sqlchain.exceptions import EmptyBatchError
from sqlchain.parameters import ParameterStyle
from sqlchain.statement import Fragment, Statement


def test_from_fragment_has_no_parameters() -> None:
    stmt = Statement.from_fragment("select 1")

    assert stmt.sql == "select 1"
    assert stmt.parameters == ()
    assert stmt.parameter_style is ParameterStyle.NUMERIC


def test_unset_parameters_are_empty() -> None:
    assert Statement("select 1", None).parameters == ()  # type: ignore[arg-type]
    assert Statement("select 1").parameters == Statement.from_fragment("select 1").parameters


def test_fragment_add_parameters() -> None:
    stmt = Fragment("select * from t where a = $1 and b = $2").add_parameters(1, "two")

    assert isinstance(stmt, Statement)
    assert stmt.sql == "select * from t where a = $1 and b = $2"
    assert stmt.parameters == (1, "two")


def test_fragment_is_a_string() -> None:
    fragment = Fragment("select 1")

    assert fragment == "select 1"
    assert fragment.add_parameters() == Statement.from_fragment("select 1")


def test_new_collects_parameters() -> None:
    assert Statement.new("select $1", "a").parameters == ("a",)


def test_statement_is_frozen() -> None:
    stmt = Statement.new("select $1", "a")

    with pytest.raises(FrozenInstanceError):
        stmt.sql = "select 2"  # type: ignore[misc]


def test_parameters_are_copied_from_caller_list() -> None:
    values = ["a"]
    stmt = Statement("select $1", values)  # type: ignore[arg-type]
    values.append("b")

    assert stmt.parameters == ("a",)


def test_concat_joins_text_and_parameters() -> None:
    a = Statement.new("select * from t where a = $1", 1)
    b = Statement.new(" and b = $2", 2)

    joined = a.concat(b)

    assert joined.sql == a.sql + b.sql
    assert joined.parameters == (1, 2)


def test_concat_leaves_operands_unchanged() -> None:
    a = Statement.new("select $1", 1)
    b = Statement.new(", $2", 2)

    a.concat(b)

    assert a == Statement.new("select $1", 1)
    assert b == Statement.new(", $2", 2)


def test_add_operator_concatenates() -> None:
    a = Statement.new("select $1", 1)
    b = Statement.new(", $2", 2)

    assert a + b == a.concat(b)


def test_add_operator_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        Statement.new("select 1") + "x"  # type: ignore[operator]


def test_concat_keeps_left_style() -> None:
    a = Statement.from_fragment("select", ParameterStyle.QMARK)
    b = Statement.from_fragment(" 1")

    assert a.concat(b).parameter_style is ParameterStyle.QMARK


def test_where_in_continues_numbering() -> None:
    base = Statement.new("select * from t where a = $1 or b = $2", "x", "y")

    stmt = base.where_in("id", ["1", "2"])

    assert stmt.sql.endswith("where id in ($3,$4) ")
    assert stmt.parameters == ("x", "y", "1", "2")


def test_where_in_exact_text() -> None:
    stmt = Statement.from_fragment("select * from users").where_in("id", ["1", "2", "3"])

    assert stmt.sql == "select * from users where id in ($1,$2,$3) "
    assert stmt.parameters == ("1", "2", "3")


def test_and_where_in_chains_after_where_in() -> None:
    stmt = (
        Statement.from_fragment("select * from users")
        .where_in("id", ["1", "2"])
        .and_where_in("status", ["active"])
    )

    assert stmt.sql == "select * from users where id in ($1,$2)  and status in ($3) "
    assert stmt.parameters == ("1", "2", "active")


def test_where_in_does_not_alias_base() -> None:
    base = Statement.new("select * from t where a = $1", "a")

    first = base.where_in("id", ["1"])
    second = base.where_in("id", ["2", "3"])

    assert base.parameters == ("a",)
    assert first.parameters == ("a", "1")
    assert second.parameters == ("a", "2", "3")
    assert second.sql.endswith("where id in ($2,$3) ")


@pytest.mark.parametrize("method", ["where_in", "and_where_in"])
def test_in_clause_rejects_empty_values(method: str) -> None:
    stmt = Statement.from_fragment("select * from users")

    with pytest.raises(EmptyBatchError) as exc_info:
        getattr(stmt, method)("id", [])

    assert exc_info.value.key == "id"


def test_where_in_qmark_style() -> None:
    stmt = Fragment("select * from t where a = ?").add_parameters("a", style=ParameterStyle.QMARK)

    assert stmt.and_where_in("id", [1, 2]).sql == "select * from t where a = ? and id in (?,?) "


def test_limit_offset_order_by() -> None:
    stmt = Statement.from_fragment("select * from users").order_by("created_at desc").limit(10).offset(20)

    assert stmt.sql == "select * from users order by created_at desc limit 10 offset 20"
    assert stmt.parameters == ()


def test_tail_clauses_keep_parameters() -> None:
    base = Statement.new("select * from t where a = $1", "a")

    assert base.limit(5).parameters == ("a",)
    assert base.sql == "select * from t where a = $1"


def test_where_in_then_limit_spacing() -> None:
    stmt = Fragment("select * from users").add_parameters().where_in("id", ["1", "2", "3"]).limit(10)

    assert stmt.sql == "select * from users where id in ($1,$2,$3)  limit 10"


def test_describe() -> None:
    stmt = Statement.new("select * from t where a = $1", "a")

    assert stmt.describe() == "sql= select * from t where a = $1\n parameters=['a']"


def test_concurrent_branches_share_no_state() -> None:
    base = Statement.new("select * from t where a = $1", "a")
    results: dict[int, Statement] = {}

    def build(n: int) -> None:
        results[n] = base.where_in("id", [str(v) for v in range(n)])

    threads = [threading.Thread(target=build, args=(n,)) for n in range(1, 9)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert base.parameters == ("a",)
    for n, stmt in results.items():
        assert stmt.parameters == ("a", *(str(v) for v in range(n)))


@pytest.mark.parametrize("values", ["42", b"42"])
@pytest.mark.parametrize("method", ["where_in", "and_where_in"])
def test_in_clause_rejects_single_string(method: str, values: object) -> None:
    stmt = Statement.from_fragment("select * from users")

    with pytest.raises(TypeError, match="'id'"):
        getattr(stmt, method)("id", values)
