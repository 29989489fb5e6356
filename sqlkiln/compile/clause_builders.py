"""Clause-level SQL builders.

Each class handles exactly one SQL clause and is a pure function of its
input list and the injected :class:`~sqlkiln.compile.base.SQLCompiler`.
Builders return a ready-to-concatenate fragment, including its leading
space and keyword, or ``""`` when there is nothing to render.

Classes
-------
ColumnDefinitionBuilder : ``<col> <type>(<len>) ... , ...`` for CREATE TABLE
SelectColumnsBuilder    : ``* | <col>, <col>`` for SELECT
WhereClauseBuilder      : `` WHERE <pred> [AND|OR <pred>] ...``
GroupByClauseBuilder    : `` GROUP BY <col>,<col>``
OrderByClauseBuilder    : `` ORDER BY <col> ASC,<col> DESC``
PaginationBuilder       : `` LIMIT n`` / `` OFFSET n``
"""
from __future__ import annotations

from collections.abc import Sequence

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.schema.clauses import NULL_SENTINEL, GroupBy, OrderBy, RawExpression, Where
from sqlkiln.schema.columns import ColumnDefinition


class ColumnDefinitionBuilder:
    """Builds the column list of a ``CREATE TABLE`` statement."""

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, columns: Sequence[ColumnDefinition]) -> str:
        return ", ".join(self._compiler.column_definition(c) for c in columns)


class SelectColumnsBuilder:
    """Builds the ``SELECT`` column list.

    An empty list renders ``*``.  :class:`RawExpression` entries, the bare
    wildcard ``*`` and function-call expressions such as ``MIN(created_at)``
    are emitted as-is; every other entry is quoted as an identifier.
    """

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, columns: Sequence[str | RawExpression]) -> str:
        if not columns:
            return "*"
        return ", ".join(self._build_item(c) for c in columns)

    def _build_item(self, column: str | RawExpression) -> str:
        if isinstance(column, RawExpression):
            return column.sql
        if column == "*" or "(" in column:
            return column
        return self._compiler.quote_identifier(column)


class WhereClauseBuilder:
    """Builds the `` WHERE …`` fragment.

    Raw predicates are emitted verbatim and never receive a connective;
    structured predicates after the first emitted fragment are prefixed
    with their ``AND`` / ``OR`` connective.
    """

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, predicates: Sequence[Where]) -> str:
        parts: list[str] = []
        for predicate in predicates:
            if predicate.raw:
                parts.append(predicate.raw)
                continue
            if not predicate.column:
                continue
            sql = self._build_single(predicate)
            if parts:
                sql = f"{predicate.type.value} {sql}"
            parts.append(sql)

        if not parts:
            return ""
        return " WHERE " + " ".join(parts)

    def _build_single(self, predicate: Where) -> str:
        column = self._compiler.quote_identifier(predicate.column)
        operator = predicate.sql_operator
        if predicate.value == NULL_SENTINEL and operator == "=":
            return f"{column} IS NULL"
        if predicate.value == NULL_SENTINEL and operator == "<>":
            return f"{column} IS NOT NULL"
        return f"{column} {operator} {self._compiler.quote_literal(predicate.value)}"


class GroupByClauseBuilder:
    """Builds the `` GROUP BY …`` fragment."""

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, keys: Sequence[GroupBy]) -> str:
        if not keys:
            return ""
        quote = self._compiler.quote_identifier
        return " GROUP BY " + ",".join(quote(k.column) for k in keys)


class OrderByClauseBuilder:
    """Builds the `` ORDER BY …`` fragment."""

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, keys: Sequence[OrderBy]) -> str:
        if not keys:
            return ""
        quote = self._compiler.quote_identifier
        return " ORDER BY " + ",".join(f"{quote(k.column)} {k.direction.value}" for k in keys)


class PaginationBuilder:
    """Builds the `` LIMIT n`` and `` OFFSET n`` fragments.

    Each is rendered only when strictly positive, independently of the
    other, so ``LIMIT 0`` or ``LIMIT -1`` never reach the output.
    """

    def build_limit(self, limit: int) -> str:
        return f" LIMIT {limit}" if limit > 0 else ""

    def build_offset(self, offset: int) -> str:
        return f" OFFSET {offset}" if offset > 0 else ""

    def build(self, limit: int, offset: int) -> str:
        return self.build_limit(limit) + self.build_offset(offset)
