"""sqlkiln schema models: dialect tags, column definitions, clause entries."""
from sqlkiln.schema.clauses import (
    Connective,
    GroupBy,
    OrderBy,
    RawExpression,
    SortDirection,
    Where,
    literal_value,
    raw,
)
from sqlkiln.schema.columns import ColumnDefinition, ColumnOptions, ColumnType
from sqlkiln.schema.dialect import NOT_SUPPORTED, SUPPORTED_DIALECTS, Dialect

__all__ = [
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
    "literal_value",
    "raw",
]
