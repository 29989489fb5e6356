"""Compiler registry (Open/Closed Principle).

Adding a dialect means registering one :class:`SQLCompiler` subclass; the
statement builder and the module-level compile helpers look it up by tag
without any if-chain on the dialect name.

Usage::

    from sqlkiln.compile.registry import CompilerFactory

    @CompilerFactory.register("mariadb")
    class MariaDBCompiler(MySQLCompiler):
        ...

Unknown tags resolve to :class:`~sqlkiln.compile.fallback.UnsupportedCompiler`
instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import ClassVar

from sqlkiln.compile.base import SQLCompiler
from sqlkiln.compile.fallback import UnsupportedCompiler
from sqlkiln.schema.dialect import Dialect, dialect_tag

logger = logging.getLogger(__name__)


class CompilerFactory:
    """Registry mapping dialect tags to :class:`SQLCompiler` classes.

    Callers register a compiler class once; builders create instances on
    demand via :meth:`create`.

    Example::

        @CompilerFactory.register("mysql")
        class MySQLCompiler(SQLCompiler):
            ...

        compiler = CompilerFactory.create("mysql")
    """

    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Decorator that registers a compiler class under ``name``.

        Args:
            name: The dialect tag (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the compiler class.
        """

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls._compilers[name] = compiler_cls
            return compiler_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        """Register a compiler class without using the decorator form.

        Args:
            name: The dialect tag.
            compiler_cls: The :class:`SQLCompiler` subclass to register.
        """
        cls._compilers[name] = compiler_cls

    @classmethod
    def create(cls, name: Dialect | str) -> SQLCompiler:
        """Instantiate the compiler registered for ``name``.

        Args:
            name: A :class:`Dialect` or dialect tag string.

        Returns:
            A fresh :class:`SQLCompiler`; an :class:`UnsupportedCompiler`
            when no compiler is registered for ``name``.
        """
        tag = dialect_tag(name)
        compiler_cls = cls._compilers.get(tag)
        if compiler_cls is None:
            logger.warning(
                "Unsupported dialect %r; registered dialects: %s",
                tag,
                ", ".join(cls.registered_targets()),
            )
            return UnsupportedCompiler(tag)
        return compiler_cls()

    @classmethod
    def is_registered(cls, name: Dialect | str) -> bool:
        """Return True when a compiler is registered for ``name``."""
        return dialect_tag(name) in cls._compilers

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect tags."""
        return sorted(cls._compilers)
