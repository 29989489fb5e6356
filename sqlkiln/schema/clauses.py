"""Pydantic models for the clause lists accumulated by StatementBuilder.

Each model is one entry in a clause list: a WHERE predicate, an ORDER BY
key, a GROUP BY key, or a raw SELECT expression.  Entries are kept in
insertion order and compiled by the builders in
:mod:`sqlkiln.compile.clause_builders`.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from sqlkiln.errors import UsageError


class Connective(str, Enum):
    """Logical connective joining a predicate to the one before it."""

    AND = "AND"
    OR = "OR"


class SortDirection(str, Enum):
    """ORDER BY direction keywords."""

    ASC = "ASC"
    DESC = "DESC"


#: Operator aliases rewritten to their SQL spelling.
OPERATOR_ALIASES: dict[str, str] = {
    "==": "=",
    "===": "=",
    "!=": "<>",
    "!==": "<>",
}

#: The literal value that turns ``=`` / ``<>`` into ``IS [NOT] NULL``.
NULL_SENTINEL = "NULL"


def literal_value(value: Any) -> str:
    """Return the text of a value bound into a statement as a literal.

    Strings pass through; ints and floats are rendered with ``str()``.

    Raises:
        UsageError: For ``None``, booleans and any other type, which have no
            single unambiguous literal spelling.  Use ``"NULL"`` in a WHERE
            predicate to test for NULL.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise UsageError(
        f"Unsupported literal value {value!r} of type {type(value).__name__}; "
        "expected str, int or float."
    )


class Where(BaseModel):
    """A single WHERE predicate.

    Either ``raw`` is set, and the fragment is emitted verbatim with no
    quoting or connective, or ``column`` / ``operator`` / ``value`` describe
    a structured comparison.

    Note that ``value="NULL"`` combined with ``=`` or ``<>`` compiles to
    ``IS NULL`` / ``IS NOT NULL``.  This is a string comparison: there is no
    way to compare a column against the four-character text ``NULL``.

    Attributes:
        raw: Pre-formed SQL fragment; the caller is responsible for its safety.
        column: Column (optionally ``table.column``) to compare.
        operator: Comparison operator; ``==``/``===``/``!=``/``!==`` aliases
            are accepted.
        value: Literal value, quoted and escaped for the dialect.
        type: Connective to the previous predicate.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    raw: str = ""
    column: str = ""
    operator: str = "="
    value: str = ""
    type: Connective = Connective.AND

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, value: Any) -> str:
        return literal_value(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper() or Connective.AND
        return value

    @property
    def sql_operator(self) -> str:
        """The operator with aliases rewritten (``!=`` becomes ``<>``)."""
        return OPERATOR_ALIASES.get(self.operator, self.operator)


class OrderBy(BaseModel):
    """A single ORDER BY key.

    Attributes:
        column: Column to sort by.
        direction: ``ASC`` or ``DESC``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    direction: SortDirection = SortDirection.ASC

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        if isinstance(value, SortDirection):
            return value
        if isinstance(value, str) and value.strip().lower() in ("desc", "descending"):
            return SortDirection.DESC
        return SortDirection.ASC


class GroupBy(BaseModel):
    """A single GROUP BY key.

    Attributes:
        column: Column to group by.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str


class RawExpression(BaseModel):
    """A SELECT column entry emitted without identifier quoting.

    Use for aggregates and other expressions, e.g.
    ``raw("MIN(created_at)")``.

    Attributes:
        sql: The expression text.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sql: str


def raw(sql: str) -> RawExpression:
    """Shorthand for :class:`RawExpression`."""
    return RawExpression(sql=sql)
