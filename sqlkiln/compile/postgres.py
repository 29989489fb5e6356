"""PostgreSQL dialect compiler."""

from __future__ import annotations

from typing import ClassVar

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.schema.columns import ColumnDefinition, ColumnOptions, ColumnType


class PostgresCompiler(SQLCompiler):
    """Compiles statements to PostgreSQL-flavoured SQL.

    Identifiers are quoted with double quotes.  Literal values are wrapped
    in double quotes as well, with embedded double quotes doubled; this
    diverges from standard SQL and is kept for output compatibility with
    existing callers.
    """

    identifier_quote: ClassVar[str] = '"'
    literal_quote: ClassVar[str] = '"'
    auto_increment_keyword: ClassVar[str] = "SERIAL"
    type_names: ClassVar[dict[str, str]] = {
        ColumnType.STRING.value: "TEXT",
        ColumnType.INTEGER.value: "INTEGER",
        ColumnType.FLOAT.value: "REAL",
        ColumnType.TEXT.value: "TEXT",
        ColumnType.BLOB.value: "BYTEA",
        ColumnType.DATE.value: "DATE",
        ColumnType.DATETIME.value: "TIMESTAMP",
        ColumnType.DECIMAL.value: "DECIMAL",
    }

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def length_suffix(self, column_type: str, native: str, options: ColumnOptions) -> str:
        if native == "TEXT":
            return ""  # TEXT is unbounded in PostgreSQL and takes no length
        return super().length_suffix(column_type, native, options)

    def column_type_sql(self, column: ColumnDefinition) -> str:
        # SERIAL is a type of its own, not a modifier on the base type.
        if column.options.auto:
            return self.auto_increment_keyword
        return super().column_type_sql(column)
