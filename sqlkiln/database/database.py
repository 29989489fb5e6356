"""Thin execution wrapper around a SQLAlchemy engine.

The wrapper executes the strings produced by
:class:`~sqlkiln.compile.builder.StatementBuilder` unmodified.  It owns the
single-transaction slot: at most one transaction is active per
:class:`Database`, and while it is active every ``execute`` / ``query``
call is routed to its connection.  Outside a transaction each call runs on
a short-lived connection inside its own ``engine.begin()`` block.

Example::

    db = Database.from_url("sqlite:///app.db")
    with db.transaction():
        db.execute(db.builder().table("users").insert({"name": "Tom"}))
    rows = db.select_to_dicts(db.builder().table("users").select())
"""
from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from sqlkiln.compile.builder import StatementBuilder
from sqlkiln.database.driver import database_driver_name
from sqlkiln.errors import (
    NoActiveTransactionError,
    TransactionAlreadyActiveError,
    TransactionError,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection, CursorResult, Engine, Row, RootTransaction

    from sqlkiln.config import DatabaseSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a non-query statement.

    Attributes:
        rowcount: Rows affected, as reported by the driver (-1 if unknown).
        lastrowid: Id of the last inserted row, when the driver reports one.
    """

    rowcount: int
    lastrowid: int | None = None


@dataclass
class SqlLogEntry:
    """One recorded statement and how long it took to run."""

    sql: str
    duration: timedelta = timedelta(0)


class Database:
    """Executes SQL strings on a SQLAlchemy engine with one transaction slot.

    Args:
        engine: The engine to run statements on.
        dialect: Dialect tag for :meth:`builder`; inferred from the engine's
            driver when omitted.
        debug: Log every statement at INFO level before executing it.
        sql_log_enabled: Record statements and durations (see :meth:`sql_log`).
    """

    def __init__(
        self,
        engine: Engine,
        dialect: str | None = None,
        *,
        debug: bool = False,
        sql_log_enabled: bool = False,
    ) -> None:
        self._engine = engine
        self._dialect = dialect or database_driver_name(engine)
        self._debug = debug
        self._sql_log_enabled = sql_log_enabled
        self._sql_log: dict[str, SqlLogEntry] = {}
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        dialect: str | None = None,
        debug: bool = False,
        sql_log_enabled: bool = False,
        **engine_options: Any,
    ) -> Database:
        """Create an engine for ``url`` and wrap it.

        Args:
            url: SQLAlchemy database URL (e.g. ``"sqlite:///app.db"``).
            dialect: Optional dialect tag override.
            debug: See :class:`Database`.
            sql_log_enabled: See :class:`Database`.
            **engine_options: Forwarded to ``sqlalchemy.create_engine``.

        Returns:
            A :class:`Database` whose dialect is inferred from the driver
            unless ``dialect`` is given.
        """
        from sqlalchemy import create_engine

        engine = create_engine(url, **engine_options)
        return cls(engine, dialect, debug=debug, sql_log_enabled=sql_log_enabled)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> Database:
        """Build a :class:`Database` from :class:`~sqlkiln.config.DatabaseSettings`."""
        return cls.from_url(
            settings.url,
            dialect=settings.dialect,
            debug=settings.debug,
            sql_log_enabled=settings.sql_log_enabled,
            echo=settings.echo,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect(self) -> str:
        """Dialect tag (``mysql``, ``postgres``, ``sqlite`` or a raw driver name)."""
        return self._dialect

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def builder(self) -> StatementBuilder:
        """Return a fresh :class:`StatementBuilder` for this database's dialect."""
        return StatementBuilder(self._dialect)

    def debug_enable(self, debug: bool) -> None:
        self._debug = debug

    def close(self) -> None:
        """Roll back any open transaction and dispose of the engine's pool."""
        if self._transaction is not None:
            self.rollback_transaction()
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin_transaction(self) -> None:
        """Open the transaction slot.

        Raises:
            TransactionAlreadyActiveError: If a transaction is already active.
            TransactionError: If the driver fails to begin one.
        """
        if self._transaction is not None:
            raise TransactionAlreadyActiveError()

        connection = self._engine.connect()
        try:
            transaction = connection.begin()
        except SQLAlchemyError as exc:
            connection.close()
            raise TransactionError(f"failed to begin transaction: {exc}") from exc

        self._connection = connection
        self._transaction = transaction

    def commit_transaction(self) -> None:
        """Commit and release the active transaction.

        Raises:
            NoActiveTransactionError: If no transaction is active.
            TransactionError: If the commit fails; the slot is released.
        """
        if self._transaction is None:
            raise NoActiveTransactionError("commit")
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            raise TransactionError(f"failed to commit transaction: {exc}") from exc
        finally:
            self._release()

    def rollback_transaction(self) -> None:
        """Roll back and release the active transaction.

        Raises:
            NoActiveTransactionError: If no transaction is active.
            TransactionError: If the rollback fails; the slot is released.
        """
        if self._transaction is None:
            raise NoActiveTransactionError("rollback")
        try:
            self._transaction.rollback()
        except SQLAlchemyError as exc:
            raise TransactionError(f"failed to rollback transaction: {exc}") from exc
        finally:
            self._release()

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """Run the ``with`` block in a transaction.

        Commits when the block completes, rolls back when it raises.  A
        failing rollback is logged and the block's exception propagates.
        """
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            try:
                self.rollback_transaction()
            except TransactionError:
                logger.exception("Rollback failed")
            raise
        self.commit_transaction()

    def exec_in_transaction(self, fn: Callable[[Database], T]) -> T:
        """Call ``fn(self)`` inside :meth:`transaction` and return its result."""
        with self.transaction():
            return fn(self)

    def _release(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, sql: str) -> ExecResult:
        """Execute a statement that returns no rows (DDL, INSERT, UPDATE, ...)."""
        return self._run(sql, _exec_result)

    def query(self, sql: str) -> list[Row[Any]]:
        """Execute a query and return all rows."""
        return self._run(sql, lambda result: list(result.all()))

    def select_to_dicts(self, sql: str) -> list[dict[str, Any]]:
        """Execute a query and return each row as a column → value dict.

        An empty result is an empty list, never an error.
        """
        return self._run(sql, lambda result: [dict(row) for row in result.mappings()])

    def select_to_string_dicts(self, sql: str) -> list[dict[str, str]]:
        """Like :meth:`select_to_dicts` with values stringified (``None`` → ``""``)."""
        return [
            {key: "" if value is None else str(value) for key, value in row.items()}
            for row in self.select_to_dicts(sql)
        ]

    def _run(self, sql: str, consume: Callable[[CursorResult[Any]], T]) -> T:
        with self._track(sql):
            if self._connection is not None:
                return consume(self._connection.exec_driver_sql(sql))
            with self._engine.begin() as connection:
                return consume(connection.exec_driver_sql(sql))

    @contextmanager
    def _track(self, sql: str) -> Iterator[None]:
        if self._debug:
            logger.info("%s", sql)
        if not self._sql_log_enabled:
            yield
            return

        entry = SqlLogEntry(sql=sql)
        self._sql_log[uuid.uuid4().hex] = entry
        start = time.perf_counter()
        try:
            yield
        finally:
            entry.duration = timedelta(seconds=time.perf_counter() - start)

    # ------------------------------------------------------------------
    # SQL log
    # ------------------------------------------------------------------

    def sql_log_enable(self, enable: bool) -> None:
        self._sql_log_enabled = enable

    def sql_log(self) -> list[dict[str, str]]:
        """Return recorded statements, oldest first, as ``{"sql", "time"}`` dicts."""
        return [
            {"sql": entry.sql, "time": str(entry.duration)}
            for entry in self._sql_log.values()
        ]

    def sql_log_len(self) -> int:
        return len(self._sql_log)

    def sql_log_empty(self) -> None:
        self._sql_log.clear()

    def sql_log_shrink(self, leave_last: int) -> None:
        """Drop all but the ``leave_last`` most recent entries."""
        if len(self._sql_log) <= leave_last:
            return
        keep = list(self._sql_log.items())[-leave_last:] if leave_last > 0 else []
        self._sql_log = dict(keep)


def _exec_result(result: CursorResult[Any]) -> ExecResult:
    lastrowid = getattr(result, "lastrowid", None)
    return ExecResult(rowcount=result.rowcount, lastrowid=lastrowid)
