"""SQLite dialect compiler."""
from __future__ import annotations

from typing import ClassVar

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.schema.columns import ColumnType


class SQLiteCompiler(SQLCompiler):
    """Compiles statements to SQLite-flavoured SQL.

    Identifiers use double quotes, literals use standard single quotes with
    embedded single quotes doubled.

    Note: SQLite accepts (and ignores) a length on TEXT columns, so
    ``TEXT(40)`` is emitted when a length option is set.

    Auto-increment columns render as ``INTEGER AUTOINCREMENT PRIMARY KEY``,
    keeping the keyword order shared by all dialects.  SQLite itself only
    accepts ``INTEGER PRIMARY KEY AUTOINCREMENT``, so such DDL compiles but
    is rejected when executed.  Declare ``INTEGER`` with ``primary`` alone
    to get an auto-assigned rowid alias on SQLite.
    """

    identifier_quote: ClassVar[str] = '"'
    literal_quote: ClassVar[str] = "'"
    auto_increment_keyword: ClassVar[str] = "AUTOINCREMENT"
    type_names: ClassVar[dict[str, str]] = {
        ColumnType.STRING.value: "TEXT",
        ColumnType.INTEGER.value: "INTEGER",
        ColumnType.FLOAT.value: "REAL",
        ColumnType.TEXT.value: "TEXT",
        ColumnType.BLOB.value: "BLOB",
        ColumnType.DATE.value: "DATE",
        ColumnType.DATETIME.value: "DATETIME",
        ColumnType.DECIMAL.value: "DECIMAL",
    }

    @property
    def dialect_name(self) -> str:
        return "sqlite"
