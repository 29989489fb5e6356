"""Custom exception hierarchy for sqlkiln.

All public errors inherit from SqlKilnError so callers can catch the base
class for any sqlkiln-specific failure.
"""
from __future__ import annotations

from typing import Any


class SqlKilnError(Exception):
    """Base exception for all sqlkiln errors."""


class UsageError(SqlKilnError):
    """Raised when the builder is driven in a way that cannot produce SQL.

    These indicate a programming mistake in the caller, not a runtime
    condition to recover from.
    """


class MissingTableError(UsageError):
    """Raised when a terminal call is made before a table was set.

    Args:
        statement: The statement kind being compiled (e.g. ``"SELECT"``).
    """

    def __init__(self, statement: str) -> None:
        super().__init__(
            f"In method {statement.lower()}() no table specified "
            f"for the {statement} statement."
        )
        self.statement = statement


class ColumnDefinitionError(SqlKilnError):
    """Raised when a column definition carries invalid options.

    Args:
        column: Name of the offending column.
        details: Field-level problems, keyed by option name.
    """

    def __init__(self, column: str, details: dict[str, Any] | None = None) -> None:
        self.details: dict[str, Any] = details or {}
        problems = ", ".join(f"{k}: {v}" for k, v in self.details.items())
        super().__init__(f"Invalid options for column '{column}': {problems}")
        self.column = column


class TransactionError(SqlKilnError):
    """Raised when a transaction cannot be started, committed or rolled back."""


class TransactionAlreadyActiveError(TransactionError):
    """Raised when a second transaction is begun on the same Database."""

    def __init__(self) -> None:
        super().__init__("transaction already in progress")


class NoActiveTransactionError(TransactionError):
    """Raised on commit or rollback when no transaction is active.

    Args:
        action: ``"commit"`` or ``"rollback"``.
    """

    def __init__(self, action: str) -> None:
        super().__init__(f"no transaction in progress to {action}")
        self.action = action
