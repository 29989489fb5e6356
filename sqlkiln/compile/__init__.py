"""sqlkiln compilation layer: clause state → dialect-specific SQL."""
from sqlkiln.compile.base import SQLCompiler
from sqlkiln.compile.builder import StatementBuilder
from sqlkiln.compile.fallback import UnsupportedCompiler
from sqlkiln.compile.mysql import MySQLCompiler
from sqlkiln.compile.postgres import PostgresCompiler
from sqlkiln.compile.registry import CompilerFactory
from sqlkiln.compile.sqlite import SQLiteCompiler

__all__ = [
    "SQLCompiler",
    "StatementBuilder",
    "CompilerFactory",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    "UnsupportedCompiler",
]
