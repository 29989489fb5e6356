"""Integration tests: compile → execute against a real SQLite in-memory DB.

Every statement is produced by StatementBuilder and executed unmodified
through Database, so these tests double as a check that the compiled
SQLite output is accepted by the engine.
"""
from __future__ import annotations

import logging

import pytest

sqlalchemy = pytest.importorskip("sqlalchemy")

from sqlkiln.database import Database, ExecResult  # noqa: E402
from sqlkiln.errors import (  # noqa: E402
    NoActiveTransactionError,
    TransactionAlreadyActiveError,
)

pytestmark = pytest.mark.integration


@pytest.fixture()
def db():
    # "sqlite://" uses a single shared in-memory connection per thread.
    database = Database(sqlalchemy.create_engine("sqlite://"), sql_log_enabled=True)
    database.execute(
        database.builder()
        .table("users")
        .column("id", "integer", {"primary": "yes"})
        .column("name", "string", {"length": "40"})
        .column("price", "decimal", {"nullable": "yes"})
        .column("deleted_at", "datetime", {"nullable": "yes"})
        .create()
    )
    yield database
    database.close()


def _insert(db: Database, **values) -> ExecResult:
    return db.execute(db.builder().table("users").insert(values))


def test_dialect_is_sniffed_from_engine(db):
    assert db.dialect == "sqlite"
    assert db.builder().dialect == "sqlite"


def test_insert_and_select(db):
    result = _insert(db, id=1, name="Tom")
    assert result.rowcount == 1

    rows = db.select_to_dicts(db.builder().table("users").select(["id", "name"]))
    assert rows == [{"id": 1, "name": "Tom"}]


def test_where_order_limit(db):
    for i, name in enumerate(["Cid", "Ann", "Bob"], start=1):
        _insert(db, id=i, name=name)

    sql = (
        db.builder()
        .table("users")
        .where("id", ">", 1)
        .order_by("name", "desc")
        .limit(1)
        .select(["name"])
    )
    assert db.select_to_dicts(sql) == [{"name": "Bob"}]


def test_quote_in_value_round_trips(db):
    _insert(db, id=1, name="O'Brien")
    sql = db.builder().table("users").where("name", "=", "O'Brien").select(["id"])
    assert db.select_to_dicts(sql) == [{"id": 1}]


def test_injection_attempt_matches_nothing(db):
    _insert(db, id=1, name="Tom")
    sql = db.builder().table("users").where("name", "=", "x' OR '1'='1").select()
    assert db.select_to_dicts(sql) == []


def test_null_sentinel(db):
    _insert(db, id=1, name="Tom")
    _insert(db, id=2, name="Ann", deleted_at="2024-01-01 00:00:00")
    sql = db.builder().table("users").where("deleted_at", "=", "NULL").select(["id"])
    assert db.select_to_dicts(sql) == [{"id": 1}]


def test_update_and_delete(db):
    _insert(db, id=1, name="Tom")
    _insert(db, id=2, name="Ann")

    updated = db.execute(db.builder().table("users").where("id", "=", 1).update({"name": "Tim"}))
    assert updated.rowcount == 1
    deleted = db.execute(db.builder().table("users").where("id", "=", 2).delete())
    assert deleted.rowcount == 1

    assert db.select_to_dicts(db.builder().table("users").select(["name"])) == [{"name": "Tim"}]


def test_group_by_with_aggregate(db):
    _insert(db, id=1, name="Tom")
    _insert(db, id=2, name="Tom")
    _insert(db, id=3, name="Ann")
    sql = db.builder().table("users").group_by("name").order_by("name").select(
        ["name", "COUNT(id)"]
    )
    rows = db.query(sql)
    assert [tuple(row) for row in rows] == [("Ann", 1), ("Tom", 2)]


def test_select_to_string_dicts(db):
    _insert(db, id=1, name="Tom")
    rows = db.select_to_string_dicts(
        db.builder().table("users").select(["id", "name", "deleted_at"])
    )
    assert rows == [{"id": "1", "name": "Tom", "deleted_at": ""}]


def test_empty_result_is_empty_list(db):
    assert db.select_to_dicts(db.builder().table("users").select()) == []


def test_view_create_and_drop(db):
    _insert(db, id=1, name="Tom")
    inner = db.builder().table("users").select(["id", "name"])
    db.execute(db.builder().view("user_names").view_columns(["uid", "uname"]).view_sql(inner).create())

    assert db.select_to_dicts(db.builder().table("user_names").select(["uname"])) == [
        {"uname": "Tom"}
    ]
    db.execute(db.builder().view("user_names").drop())


def test_create_if_not_exists_is_idempotent(db):
    sql = db.builder().table("users").column("id", "integer").create_if_not_exists()
    db.execute(sql)
    db.execute(sql)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def test_transaction_commits(db):
    with db.transaction():
        assert db.in_transaction
        _insert(db, id=1, name="Tom")
    assert not db.in_transaction
    assert len(db.select_to_dicts(db.builder().table("users").select())) == 1


def test_transaction_rolls_back_on_error(db):
    with pytest.raises(RuntimeError):
        with db.transaction():
            _insert(db, id=1, name="Tom")
            raise RuntimeError("boom")
    assert not db.in_transaction
    assert db.select_to_dicts(db.builder().table("users").select()) == []


def test_exec_in_transaction_returns_result(db):
    result = db.exec_in_transaction(lambda tx: _insert(tx, id=1, name="Tom"))
    assert result.rowcount == 1


def test_manual_transaction_rollback(db):
    db.begin_transaction()
    _insert(db, id=1, name="Tom")
    db.rollback_transaction()
    assert db.select_to_dicts(db.builder().table("users").select()) == []


def test_second_begin_is_rejected(db):
    db.begin_transaction()
    try:
        with pytest.raises(TransactionAlreadyActiveError):
            db.begin_transaction()
    finally:
        db.rollback_transaction()


@pytest.mark.parametrize("action", ["commit", "rollback"])
def test_commit_or_rollback_without_transaction(db, action):
    with pytest.raises(NoActiveTransactionError) as exc_info:
        getattr(db, f"{action}_transaction")()
    assert exc_info.value.action == action


# ---------------------------------------------------------------------------
# SQL log and debug output
# ---------------------------------------------------------------------------


def test_sql_log_records_statements(db):
    db.sql_log_empty()
    sql = db.builder().table("users").select()
    db.query(sql)

    assert db.sql_log_len() == 1
    entry = db.sql_log()[0]
    assert entry["sql"] == sql
    assert entry["time"].startswith("0:00:")


def test_sql_log_shrink_keeps_most_recent(db):
    db.sql_log_empty()
    for i in range(1, 5):
        _insert(db, id=i, name=f"n{i}")

    db.sql_log_shrink(2)

    assert db.sql_log_len() == 2
    assert [e["sql"] for e in db.sql_log()] == [
        db.builder().table("users").insert({"id": 3, "name": "n3"}),
        db.builder().table("users").insert({"id": 4, "name": "n4"}),
    ]
    db.sql_log_shrink(0)
    assert db.sql_log_len() == 0


def test_sql_log_disabled(db):
    db.sql_log_empty()
    db.sql_log_enable(False)
    db.query(db.builder().table("users").select())
    assert db.sql_log_len() == 0


def test_debug_logs_statements(db, caplog):
    db.debug_enable(True)
    sql = db.builder().table("users").select()
    with caplog.at_level(logging.INFO, logger="sqlkiln.database.database"):
        db.query(sql)
    assert sql in caplog.text
