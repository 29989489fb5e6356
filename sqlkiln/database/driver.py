"""Driver-name sniffing: map a live connection to a dialect tag.

Works with SQLAlchemy engines and connections (reported as
``"<dialect>+<driver>"``, e.g. ``"postgresql+psycopg2"``) and with plain
DB-API connections (reported as the connection class's qualified name,
e.g. ``"sqlite3.Connection"``).
"""
from __future__ import annotations

from typing import Any

#: Substrings identifying each dialect, checked in order.
_DRIVER_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mysql", ("mysql", "mariadb")),
    ("postgres", ("postgres", "psycopg", "pg8000", "asyncpg")),
    ("sqlite", ("sqlite",)),
    ("mssql", ("mssql",)),
)


def driver_full_name(bind: Any) -> str:
    """Return the name a connection reports for its driver.

    Args:
        bind: A SQLAlchemy ``Engine`` / ``Connection`` or a DB-API connection.

    Returns:
        ``"<dialect>+<driver>"`` for SQLAlchemy objects, otherwise
        ``"<module>.<class>"`` of the connection object.
    """
    dialect = getattr(bind, "dialect", None)
    if dialect is not None and hasattr(dialect, "name"):
        driver = getattr(dialect, "driver", "")
        return f"{dialect.name}+{driver}" if driver else dialect.name
    cls = type(bind)
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize_driver_name(name: str) -> str:
    """Normalise a driver name to ``mysql``, ``postgres``, ``sqlite`` or ``mssql``.

    Unrecognised names are returned unchanged; the compiler treats such
    tags as unsupported rather than failing.
    """
    lowered = name.lower()
    for tag, needles in _DRIVER_PATTERNS:
        if any(needle in lowered for needle in needles):
            return tag
    return name


def database_driver_name(bind: Any) -> str:
    """Return the dialect tag for a live engine or connection."""
    return normalize_driver_name(driver_full_name(bind))
