"""sqlkiln – deterministic multi-dialect SQL statement compiler.

Public API
----------
``StatementBuilder``
    Chain clause configuration, then call a terminal method
    (``create``, ``select``, ``insert``, ``update``, ``delete``, ``drop``)
    to get a complete SQL statement string.

``quote_identifier`` / ``quote_literal`` / ``escape``
    Dialect quoting rules as plain functions.

``compile_columns`` / ``compile_where`` / ``compile_group_by`` /
``compile_order_by`` / ``compile_limit_offset``
    Individual clause compilers as plain functions.

Execution
---------
``sqlkiln.database.Database`` wraps a SQLAlchemy engine and runs the
compiled strings; it is imported separately because it needs the optional
``sqlalchemy`` dependency::

    pip install "sqlkiln[sqlalchemy]"

Extensibility
-------------
New dialect compilers can be registered via::

    from sqlkiln.compile.registry import CompilerFactory

    @CompilerFactory.register("mariadb")
    class MariaDBCompiler(MySQLCompiler):
        ...

Unknown dialect tags never raise: they compile with ``not supported``
column fragments and unquoted identifiers.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.compile.builder import StatementBuilder
from sqlkiln.compile.clause_builders import (
    ColumnDefinitionBuilder,
    GroupByClauseBuilder,
    OrderByClauseBuilder,
    PaginationBuilder,
    WhereClauseBuilder,
)
from sqlkiln.compile.fallback import UnsupportedCompiler
from sqlkiln.compile.mysql import MySQLCompiler
from sqlkiln.compile.postgres import PostgresCompiler
from sqlkiln.compile.registry import CompilerFactory
from sqlkiln.compile.sqlite import SQLiteCompiler
from sqlkiln.errors import (
    ColumnDefinitionError,
    MissingTableError,
    NoActiveTransactionError,
    SqlKilnError,
    TransactionAlreadyActiveError,
    TransactionError,
    UsageError,
)
from sqlkiln.schema.clauses import (
    Connective,
    GroupBy,
    OrderBy,
    RawExpression,
    SortDirection,
    Where,
    raw,
)
from sqlkiln.schema.columns import ColumnDefinition, ColumnOptions, ColumnType
from sqlkiln.schema.dialect import NOT_SUPPORTED, SUPPORTED_DIALECTS, Dialect

# ---------------------------------------------------------------------------
# Register built-in compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("mysql", MySQLCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)

__all__ = [
    # Assembly
    "StatementBuilder",
    # Quoting & clause compilers
    "quote_identifier",
    "quote_literal",
    "escape",
    "compile_columns",
    "compile_where",
    "compile_group_by",
    "compile_order_by",
    "compile_limit_offset",
    # Schema types
    "Dialect",
    "SUPPORTED_DIALECTS",
    "NOT_SUPPORTED",
    "ColumnDefinition",
    "ColumnOptions",
    "ColumnType",
    "Connective",
    "GroupBy",
    "OrderBy",
    "RawExpression",
    "SortDirection",
    "Where",
    "raw",
    # Compilers
    "SQLCompiler",
    "CompilerFactory",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    "UnsupportedCompiler",
    # Errors
    "SqlKilnError",
    "UsageError",
    "MissingTableError",
    "ColumnDefinitionError",
    "TransactionError",
    "TransactionAlreadyActiveError",
    "NoActiveTransactionError",
]


def quote_identifier(name: str, dialect: Dialect | str) -> str:
    """Quote a (possibly dotted) identifier for ``dialect``.

    Example::

        quote_identifier("users.id", "mysql")  # -> `users`.`id`
    """
    return CompilerFactory.create(dialect).quote_identifier(name)


def quote_literal(value: str, dialect: Dialect | str) -> str:
    """Escape and quote a literal value for ``dialect``."""
    return CompilerFactory.create(dialect).quote_literal(value)


def escape(value: str, dialect: Dialect | str) -> str:
    """Double the dialect's literal quote character inside ``value``."""
    return CompilerFactory.create(dialect).escape(value)


def compile_columns(columns: Sequence[ColumnDefinition], dialect: Dialect | str) -> str:
    """Render a CREATE TABLE column list in declaration order.

    Args:
        columns: Column definitions, e.g. built with
            :meth:`ColumnDefinition.create`.
        dialect: Target dialect.

    Returns:
        Comma-joined column fragments; each fragment is ``not supported``
        for an unknown dialect.
    """
    return ColumnDefinitionBuilder(CompilerFactory.create(dialect)).build(columns)


def compile_where(predicates: Sequence[Where], dialect: Dialect | str) -> str:
    """Render `` WHERE …`` for ``predicates``, or ``""`` when empty."""
    return WhereClauseBuilder(CompilerFactory.create(dialect)).build(predicates)


def compile_group_by(keys: Sequence[GroupBy], dialect: Dialect | str) -> str:
    """Render `` GROUP BY …`` for ``keys``, or ``""`` when empty."""
    return GroupByClauseBuilder(CompilerFactory.create(dialect)).build(keys)


def compile_order_by(keys: Sequence[OrderBy], dialect: Dialect | str) -> str:
    """Render `` ORDER BY …`` for ``keys``, or ``""`` when empty."""
    return OrderByClauseBuilder(CompilerFactory.create(dialect)).build(keys)


def compile_limit_offset(limit: int = 0, offset: int = 0) -> str:
    """Render `` LIMIT n`` / `` OFFSET n``; non-positive values are omitted."""
    return PaginationBuilder().build(limit, offset)
