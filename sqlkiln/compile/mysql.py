"""MySQL dialect compiler."""

from __future__ import annotations

from typing import ClassVar

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.schema.columns import ColumnType

#: VARCHAR length used when a MySQL ``string`` column has no length option.
DEFAULT_VARCHAR_LENGTH = 255


class MySQLCompiler(SQLCompiler):
    """Compiles statements to MySQL-flavoured SQL.

    Identifiers are quoted with backticks (`` ` ``).  Literal values are
    wrapped in double quotes, which MySQL accepts as string delimiters
    unless ``ANSI_QUOTES`` is enabled; embedded double quotes are doubled.

    ``string`` columns become ``VARCHAR(255)`` unless a length is given,
    because MySQL refuses a VARCHAR without one.
    """

    identifier_quote: ClassVar[str] = "`"
    literal_quote: ClassVar[str] = '"'
    auto_increment_keyword: ClassVar[str] = "AUTO_INCREMENT"
    type_names: ClassVar[dict[str, str]] = {
        ColumnType.STRING.value: "VARCHAR",
        ColumnType.INTEGER.value: "BIGINT",
        ColumnType.FLOAT.value: "DOUBLE",
        ColumnType.TEXT.value: "LONGTEXT",
        ColumnType.BLOB.value: "LONGBLOB",
        ColumnType.DATE.value: "DATE",
        ColumnType.DATETIME.value: "DATETIME",
        ColumnType.DECIMAL.value: "DECIMAL",
    }

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def default_length(self, column_type: str) -> int | None:
        if column_type == ColumnType.STRING.value:
            return DEFAULT_VARCHAR_LENGTH
        return None
