"""Dialect tags understood by the compiler.

A dialect is chosen once, when a :class:`~sqlkiln.compile.builder.StatementBuilder`
is constructed, and never changes for the lifetime of that builder.  Any
string is accepted as a dialect tag; tags outside :class:`Dialect` are
compiled by the fallback compiler, which emits ``not supported`` fragments
instead of raising.
"""
from __future__ import annotations

from enum import Enum


class Dialect(str, Enum):
    """The three supported SQL grammar variants."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"


#: Tags of every dialect with a dedicated compiler.
SUPPORTED_DIALECTS: frozenset[str] = frozenset(d.value for d in Dialect)

#: Sentinel emitted in place of SQL fragments for unsupported dialects.
NOT_SUPPORTED = "not supported"


def dialect_tag(dialect: Dialect | str) -> str:
    """Return the plain string tag for ``dialect``.

    Args:
        dialect: A :class:`Dialect` member or a raw tag string.

    Returns:
        The tag string (e.g. ``"mysql"``).
    """
    if isinstance(dialect, Dialect):
        return dialect.value
    return dialect
