"""Fallback compiler for dialect tags without a registered compiler."""
from __future__ import annotations

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.schema.columns import ColumnDefinition
from sqlkiln.schema.dialect import NOT_SUPPORTED


class UnsupportedCompiler(SQLCompiler):
    """Compiler used for unknown dialects, e.g. an unrecognised driver name.

    It never raises.  Identifiers and literals pass through unquoted and
    every column definition renders as ``not supported``, so the resulting
    statement is deliberately invalid but can still be inspected.

    Args:
        name: The unrecognised dialect tag.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def dialect_name(self) -> str:
        return self._name

    @property
    def supported(self) -> bool:
        return False

    def quote_identifier(self, name: str) -> str:
        return name

    def escape(self, value: str) -> str:
        return value

    def quote_literal(self, value: str) -> str:
        return value

    def column_definition(self, column: ColumnDefinition) -> str:
        return NOT_SUPPORTED
