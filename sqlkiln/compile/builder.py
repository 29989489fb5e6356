"""Statement assembly: chained clause configuration → one SQL string.

``StatementBuilder`` is the top-level orchestrator.  Setters accumulate
clause state and return the builder for chaining; a terminal call
(``create``, ``select``, ``insert``, ``update``, ``delete``, ``drop``)
renders the statement by concatenating clause fragments in the fixed SQL
grammar order.  All dialect-specific behaviour is delegated to the
``SQLCompiler`` resolved once at construction; clause rendering is
delegated to the builders in :mod:`sqlkiln.compile.clause_builders`.

Terminal calls only read the accumulated state, so calling one twice
yields identical output.

Example::

    sql = (
        StatementBuilder("mysql")
        .table("users")
        .where("first_name", "!=", "Jane")
        .order_by("first_name", "asc")
        .limit(10)
        .select(["id", "first_name"])
    )
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.compile.clause_builders import (
    ColumnDefinitionBuilder,
    GroupByClauseBuilder,
    OrderByClauseBuilder,
    PaginationBuilder,
    SelectColumnsBuilder,
    WhereClauseBuilder,
)
from sqlkiln.compile.registry import CompilerFactory
from sqlkiln.errors import MissingTableError, UsageError
from sqlkiln.schema.clauses import (
    Connective,
    GroupBy,
    OrderBy,
    RawExpression,
    Where,
    literal_value,
)
from sqlkiln.schema.columns import ColumnDefinition, ColumnOptions, ColumnType
from sqlkiln.schema.dialect import Dialect

logger = logging.getLogger(__name__)


class StatementBuilder:
    """Accumulates clause state for one statement and compiles it.

    A builder is meant for a single logical statement and is not safe for
    concurrent configuration from several threads.

    Args:
        dialect: Target dialect.  Unknown tags are accepted and compile
            with ``not supported`` column fragments and unquoted names.
    """

    def __init__(self, dialect: Dialect | str) -> None:
        self._compiler: SQLCompiler = CompilerFactory.create(dialect)
        self._table = ""
        self._view = ""
        self._view_columns: list[str] = []
        self._view_sql = ""
        self._columns: list[ColumnDefinition] = []
        self._where: list[Where] = []
        self._group_by: list[GroupBy] = []
        self._order_by: list[OrderBy] = []
        self._limit = 0
        self._offset = 0

    @property
    def dialect(self) -> str:
        """The dialect tag this builder compiles for."""
        return self._compiler.dialect_name

    @property
    def compiler(self) -> SQLCompiler:
        return self._compiler

    # ------------------------------------------------------------------
    # Configuration (chained setters)
    # ------------------------------------------------------------------

    def table(self, name: str) -> StatementBuilder:
        self._table = name
        return self

    def view(self, name: str) -> StatementBuilder:
        """Target a view instead of a table for ``create`` and ``drop``."""
        self._view = name
        return self

    def view_columns(self, columns: Sequence[str]) -> StatementBuilder:
        self._view_columns = list(columns)
        return self

    def view_sql(self, sql: str) -> StatementBuilder:
        """Set the SELECT statement a view is defined by."""
        self._view_sql = sql
        return self

    def column(
        self,
        name: str | ColumnDefinition,
        column_type: ColumnType | str = ColumnType.STRING,
        options: ColumnOptions | Mapping[str, Any] | None = None,
    ) -> StatementBuilder:
        """Append a column definition for ``create``.

        Args:
            name: Column name, or a ready :class:`ColumnDefinition`.
            column_type: Portable type (see :class:`ColumnType`) or a
                native type name passed through unchanged.
            options: :class:`ColumnOptions` or a legacy mapping such as
                ``{"primary": "yes", "length": "40"}``.

        Raises:
            ColumnDefinitionError: If the options do not validate.
        """
        if isinstance(name, ColumnDefinition):
            self._columns.append(name)
        else:
            self._columns.append(ColumnDefinition.create(name, column_type, options))
        return self

    def where(
        self,
        column: str | Where = "",
        operator: str = "=",
        value: Any = "",
        *,
        type: Connective | str = Connective.AND,
        raw: str = "",
    ) -> StatementBuilder:
        """Append a WHERE predicate.

        Either pass a :class:`Where`, a structured ``column, operator,
        value`` triple, or ``raw=`` SQL that is emitted verbatim.

        Args:
            column: Column name, or a ready :class:`Where`.
            operator: Comparison operator; ``==`` and ``!=`` aliases allowed.
            value: Literal value; the string ``"NULL"`` with ``=`` / ``<>``
                compiles to ``IS [NOT] NULL``.
            type: ``AND`` (default) or ``OR``, joining this predicate to
                the previous one.
            raw: Pre-formed SQL, bypassing all quoting.

        Raises:
            UsageError: If ``value`` is not a str, int or float.
        """
        if isinstance(column, Where):
            self._where.append(column)
        else:
            self._where.append(
                Where(
                    raw=raw,
                    column=column,
                    operator=operator,
                    value=literal_value(value),
                    type=type,
                )
            )
        return self

    def group_by(self, column: str | GroupBy) -> StatementBuilder:
        if isinstance(column, str):
            column = GroupBy(column=column)
        self._group_by.append(column)
        return self

    def order_by(self, column: str | OrderBy, direction: str = "ASC") -> StatementBuilder:
        """Append a sort key; ``desc``/``descending`` sort descending, anything else ascending."""
        if isinstance(column, str):
            column = OrderBy(column=column, direction=direction)
        self._order_by.append(column)
        return self

    def limit(self, limit: int) -> StatementBuilder:
        self._limit = limit
        return self

    def offset(self, offset: int) -> StatementBuilder:
        self._offset = offset
        return self

    # ------------------------------------------------------------------
    # Terminal calls
    # ------------------------------------------------------------------

    def create(self) -> str:
        """Compile ``CREATE TABLE`` (or ``CREATE VIEW`` when a view is set).

        Raises:
            MissingTableError: If neither a table nor a view was set.
            UsageError: If a view has no SELECT statement.
        """
        return self._build_create(if_not_exists=False)

    def create_if_not_exists(self) -> str:
        """Like :meth:`create`, with ``IF NOT EXISTS``."""
        return self._build_create(if_not_exists=True)

    def drop(self) -> str:
        """Compile ``DROP TABLE`` (or ``DROP VIEW`` when a view is set)."""
        quote = self._compiler.quote_identifier
        if self._view:
            return self._finish("DROP VIEW", f"DROP VIEW {quote(self._view)};")
        self._require_table("DROP TABLE")
        return self._finish("DROP TABLE", f"DROP TABLE {quote(self._table)};")

    def select(self, columns: Sequence[str | RawExpression] | None = None) -> str:
        """Compile a ``SELECT`` statement.

        Args:
            columns: Columns to select; empty or ``None`` selects ``*``.
                Use :func:`~sqlkiln.schema.clauses.raw` for expressions
                that must not be quoted.

        Raises:
            MissingTableError: If no table was set.
        """
        self._require_table("SELECT")
        columns_sql = SelectColumnsBuilder(self._compiler).build(list(columns or []))
        sql = (
            f"SELECT {columns_sql} FROM {self._compiler.quote_identifier(self._table)}"
            + self._where_sql()
            + self._group_by_sql()
            + self._order_by_sql()
            + self._pagination_sql()
            + ";"
        )
        return self._finish("SELECT", sql)

    def insert(self, values: Mapping[str, Any]) -> str:
        """Compile an ``INSERT`` of one row.

        Columns are emitted in lexicographic order so the output does not
        depend on mapping iteration order.  Values must be str, int or float;
        numbers are rendered with ``str()`` and every value is quoted as a
        literal.

        Raises:
            MissingTableError: If no table was set.
            UsageError: If a value is ``None``, a bool or another type.
        """
        self._require_table("INSERT")
        quote = self._compiler.quote_identifier
        keys = sorted(values)
        names = ", ".join(quote(k) for k in keys)
        literal = self._compiler.quote_literal
        literals = ", ".join(literal(literal_value(values[k])) for k in keys)
        sql = (
            f"INSERT INTO {quote(self._table)} ({names}) VALUES ({literals})"
            + self._pagination_sql()
            + ";"
        )
        return self._finish("INSERT", sql)

    def update(self, values: Mapping[str, Any]) -> str:
        """Compile an ``UPDATE`` with columns in lexicographic order.

        Raises:
            MissingTableError: If no table was set.
            UsageError: If a value is ``None``, a bool or another type.
        """
        self._require_table("UPDATE")
        quote = self._compiler.quote_identifier
        literal = self._compiler.quote_literal
        assignments = ", ".join(
            f"{quote(k)}={literal(literal_value(values[k]))}" for k in sorted(values)
        )
        sql = (
            f"UPDATE {quote(self._table)} SET {assignments}"
            + self._where_sql()
            + self._group_by_sql()
            + self._order_by_sql()
            + self._pagination_sql()
            + ";"
        )
        return self._finish("UPDATE", sql)

    def delete(self) -> str:
        """Compile a ``DELETE``.  Use :meth:`drop` to remove the table itself.

        Raises:
            MissingTableError: If no table was set.
        """
        self._require_table("DELETE")
        sql = (
            f"DELETE FROM {self._compiler.quote_identifier(self._table)}"
            + self._where_sql()
            + self._order_by_sql()
            + self._pagination_sql()
            + ";"
        )
        return self._finish("DELETE", sql)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_create(self, if_not_exists: bool) -> str:
        quote = self._compiler.quote_identifier
        guard = " IF NOT EXISTS" if if_not_exists else ""
        if self._view:
            if not self._view_sql:
                raise UsageError(f"No SELECT statement set for view '{self._view}'.")
            columns = ""
            if self._view_columns:
                columns = " (" + ", ".join(quote(c) for c in self._view_columns) + ")"
            body = self._view_sql.strip().rstrip(";").rstrip()
            sql = f"CREATE VIEW{guard} {quote(self._view)}{columns} AS {body};"
            return self._finish("CREATE VIEW", sql)

        self._require_table("CREATE TABLE")
        columns_sql = ColumnDefinitionBuilder(self._compiler).build(self._columns)
        sql = f"CREATE TABLE{guard} {quote(self._table)}({columns_sql});"
        return self._finish("CREATE TABLE", sql)

    def _require_table(self, statement: str) -> None:
        if not self._table:
            raise MissingTableError(statement)

    def _where_sql(self) -> str:
        return WhereClauseBuilder(self._compiler).build(self._where)

    def _group_by_sql(self) -> str:
        return GroupByClauseBuilder(self._compiler).build(self._group_by)

    def _order_by_sql(self) -> str:
        return OrderByClauseBuilder(self._compiler).build(self._order_by)

    def _pagination_sql(self) -> str:
        return PaginationBuilder().build(self._limit, self._offset)

    def _finish(self, statement: str, sql: str) -> str:
        logger.debug("Compiled %s (%s): %s", statement, self.dialect, sql)
        return sql
