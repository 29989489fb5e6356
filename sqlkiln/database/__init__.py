"""Execution wrapper and driver sniffing (requires SQLAlchemy)."""
from sqlkiln.database.database import Database, ExecResult, SqlLogEntry
from sqlkiln.database.driver import (
    database_driver_name,
    driver_full_name,
    normalize_driver_name,
)

__all__ = [
    "Database",
    "ExecResult",
    "SqlLogEntry",
    "database_driver_name",
    "driver_full_name",
    "normalize_driver_name",
]
