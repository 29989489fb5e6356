"""Unit tests for the WHERE / GROUP BY / ORDER BY / LIMIT clause compilers."""
from __future__ import annotations

from decimal import Decimal

import pytest

import sqlkiln
from sqlkiln.errors import UsageError
from sqlkiln.schema.clauses import (
    Connective,
    GroupBy,
    OrderBy,
    SortDirection,
    Where,
    literal_value,
)


def _w(column: str = "", operator: str = "=", value="", **kwargs) -> Where:
    return Where(column=column, operator=operator, value=value, **kwargs)


# ---------------------------------------------------------------------------
# WHERE
# ---------------------------------------------------------------------------


def test_empty_where_renders_nothing():
    assert sqlkiln.compile_where([], "mysql") == ""


def test_single_predicate():
    assert sqlkiln.compile_where([_w("id", value="1")], "mysql") == ' WHERE `id` = "1"'
    assert sqlkiln.compile_where([_w("id", value="1")], "sqlite") == " WHERE \"id\" = '1'"


def test_first_connective_is_dropped():
    predicates = [_w("a", value="1", type="OR"), _w("b", value="2", type="OR")]
    assert sqlkiln.compile_where(predicates, "sqlite") == (
        " WHERE \"a\" = '1' OR \"b\" = '2'"
    )


def test_predicates_keep_insertion_order():
    predicates = [
        _w("a", value="1"),
        _w("b", ">", "2", type=Connective.OR),
        _w("c", "<", "3"),
    ]
    assert sqlkiln.compile_where(predicates, "postgres") == (
        ' WHERE "a" = "1" OR "b" > "2" AND "c" < "3"'
    )


@pytest.mark.parametrize(
    ("operator", "expected"),
    [("==", "="), ("===", "="), ("!=", "<>"), ("!==", "<>"), ("LIKE", "LIKE")],
)
def test_operator_aliases(operator, expected):
    sql = sqlkiln.compile_where([_w("name", operator, "x")], "sqlite")
    assert sql == f" WHERE \"name\" {expected} 'x'"


def test_null_sentinel():
    assert sqlkiln.compile_where([_w("d", "=", "NULL")], "mysql") == " WHERE `d` IS NULL"
    assert sqlkiln.compile_where([_w("d", "!=", "NULL")], "mysql") == " WHERE `d` IS NOT NULL"


def test_null_sentinel_is_case_sensitive():
    assert sqlkiln.compile_where([_w("d", "=", "null")], "mysql") == ' WHERE `d` = "null"'


def test_null_sentinel_other_operator_is_a_literal():
    assert sqlkiln.compile_where([_w("d", ">", "NULL")], "sqlite") == " WHERE \"d\" > 'NULL'"


def test_numeric_values_are_stringified():
    assert _w("n", value=5).value == "5"
    assert _w("n", value=2.5).value == "2.5"


@pytest.mark.parametrize("value", [None, True, Decimal("1.5"), ["a"]])
def test_where_model_rejects_non_literal_values(value):
    with pytest.raises(UsageError, match="Unsupported literal value"):
        Where(column="n", value=value)


def test_literal_value():
    assert literal_value("x") == "x"
    assert literal_value(0) == "0"
    assert literal_value(-1.25) == "-1.25"


def test_raw_predicate_is_verbatim_without_connective():
    predicates = [_w("a", value="1"), Where(raw="b > 2 OR c < 3")]
    assert sqlkiln.compile_where(predicates, "sqlite") == (
        " WHERE \"a\" = '1' b > 2 OR c < 3"
    )


def test_raw_predicate_first_then_structured():
    predicates = [Where(raw="x = 1"), _w("a", value="1")]
    assert sqlkiln.compile_where(predicates, "mysql") == ' WHERE x = 1 AND `a` = "1"'


def test_predicate_without_column_is_skipped():
    predicates = [_w("", value="1"), _w("a", value="1", type="OR")]
    assert sqlkiln.compile_where(predicates, "mysql") == ' WHERE `a` = "1"'


def test_value_injection_is_escaped():
    sql = sqlkiln.compile_where([_w("name", value="x' OR '1'='1")], "sqlite")
    assert sql == " WHERE \"name\" = 'x'' OR ''1''=''1'"


def test_qualified_column():
    assert sqlkiln.compile_where([_w("u.id", value="1")], "mysql") == ' WHERE `u`.`id` = "1"'


def test_lowercase_connective_is_normalised():
    assert Where(column="a", type="or").type is Connective.OR
    assert Where(column="a", type="").type is Connective.AND


# ---------------------------------------------------------------------------
# GROUP BY / ORDER BY
# ---------------------------------------------------------------------------


def test_group_by():
    keys = [GroupBy(column="country"), GroupBy(column="city")]
    assert sqlkiln.compile_group_by(keys, "mysql") == " GROUP BY `country`,`city`"
    assert sqlkiln.compile_group_by([], "mysql") == ""


def test_order_by():
    keys = [OrderBy(column="name"), OrderBy(column="created_at", direction="DESC")]
    assert sqlkiln.compile_order_by(keys, "postgres") == (
        ' ORDER BY "name" ASC,"created_at" DESC'
    )
    assert sqlkiln.compile_order_by([], "postgres") == ""


@pytest.mark.parametrize(
    ("direction", "expected"),
    [
        ("desc", SortDirection.DESC),
        ("DESC", SortDirection.DESC),
        ("Descending", SortDirection.DESC),
        ("asc", SortDirection.ASC),
        ("sideways", SortDirection.ASC),
        ("", SortDirection.ASC),
        (SortDirection.DESC, SortDirection.DESC),
    ],
)
def test_order_direction_normalisation(direction, expected):
    assert OrderBy(column="c", direction=direction).direction is expected


# ---------------------------------------------------------------------------
# LIMIT / OFFSET
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("limit", "offset", "expected"),
    [
        (0, 0, ""),
        (10, 0, " LIMIT 10"),
        (0, 5, " OFFSET 5"),
        (10, 20, " LIMIT 10 OFFSET 20"),
        (-1, -1, ""),
    ],
)
def test_limit_offset(limit, offset, expected):
    assert sqlkiln.compile_limit_offset(limit, offset) == expected
