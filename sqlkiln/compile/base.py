"""Compiler abstractions: the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines the quoting, escaping and column-definition
  algorithm once, driven by per-dialect lookup tables.
- ``MySQLCompiler``, ``PostgresCompiler`` and ``SQLiteCompiler`` fill in
  the tables and override the few steps that genuinely differ (default
  VARCHAR length, TEXT without length, SERIAL as a type).
- ``UnsupportedCompiler`` is the single default case for unknown dialects.

Every identifier and literal that reaches the output passes through
:meth:`SQLCompiler.quote_identifier` or :meth:`SQLCompiler.quote_literal`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from sqlkiln.schema.columns import ColumnDefinition, ColumnOptions

#: Precision and scale used for DECIMAL columns without explicit options.
DEFAULT_DECIMAL_LENGTH = 10
DEFAULT_DECIMAL_PLACES = 2


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    Subclasses set the class-level tables; the clause builders and
    ``StatementBuilder`` use this interface via the Strategy / Template
    Method patterns.

    Attributes:
        identifier_quote: Character wrapped around each identifier segment.
        literal_quote: Character wrapped around literal values.
        type_names: Portable column type → native type keyword.
        auto_increment_keyword: Keyword appended for ``auto`` columns.
    """

    identifier_quote: ClassVar[str] = '"'
    literal_quote: ClassVar[str] = "'"
    type_names: ClassVar[dict[str, str]] = {}
    auto_increment_keyword: ClassVar[str] = ""

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (``'mysql'``, ``'postgres'``, ...)."""

    @property
    def supported(self) -> bool:
        """False only for the fallback compiler of an unknown dialect."""
        return True

    # ------------------------------------------------------------------
    # Quoting & escaping
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Dotted names are quoted segment by segment, so ``users.id`` becomes
        ``"users"."id"`` rather than one identifier containing a dot.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """
        return ".".join(self._quote_identifier_part(part) for part in name.split("."))

    def _quote_identifier_part(self, part: str) -> str:
        q = self.identifier_quote
        return f"{q}{part.replace(q, q + q)}{q}"

    def escape(self, value: str) -> str:
        """Double every embedded literal quote character.

        This neutralises quote break-out for the dialect's literal quoting
        scheme; it is not a general purpose sanitiser.
        """
        q = self.literal_quote
        return value.replace(q, q + q)

    def quote_literal(self, value: str) -> str:
        """Return ``value`` escaped and wrapped in the literal quote."""
        q = self.literal_quote
        return f"{q}{self.escape(value)}{q}"

    # ------------------------------------------------------------------
    # Column type mapping
    # ------------------------------------------------------------------

    def native_type(self, column_type: str) -> str:
        """Map a portable column type to the dialect keyword.

        Unknown types are returned unchanged.
        """
        return self.type_names.get(column_type, column_type)

    def default_length(self, column_type: str) -> int | None:
        """Length used when none was supplied; ``None`` renders no length."""
        return None

    def length_suffix(self, column_type: str, native: str, options: ColumnOptions) -> str:
        """Return the ``(length)`` / ``(length,decimals)`` suffix, or ``""``."""
        if native == "DECIMAL":
            length = options.length or DEFAULT_DECIMAL_LENGTH
            decimals = DEFAULT_DECIMAL_PLACES if options.decimals is None else options.decimals
            return f"({length},{decimals})"
        length = options.length or self.default_length(column_type)
        return f"({length})" if length else ""

    def column_type_sql(self, column: ColumnDefinition) -> str:
        """Render the type keyword, length suffix and auto-increment marker."""
        native = self.native_type(column.type)
        sql = native + self.length_suffix(column.type, native, column.options)
        if column.options.auto:
            sql += f" {self.auto_increment_keyword}"
        return sql

    def column_definition(self, column: ColumnDefinition) -> str:
        """Render one column of a CREATE TABLE column list.

        Args:
            column: The column to render.

        Returns:
            e.g. ``"id" TEXT(40) PRIMARY KEY NOT NULL``.
        """
        sql = f"{self.quote_identifier(column.name)} {self.column_type_sql(column)}"
        if column.options.primary:
            sql += " PRIMARY KEY"
        if not column.options.nullable:
            sql += " NOT NULL"
        return sql

