"""Test fixtures: the canonical ``users`` table and its DDL per dialect."""

from __future__ import annotations

from typing import Literal

from sqlkiln.compile.builder import StatementBuilder
from sqlkiln.schema.columns import ColumnDefinition

DialectName = Literal["mysql", "postgres", "sqlite"]

#: Expected ``CREATE TABLE`` output for :func:`users_table`.
USERS_DDL: dict[str, str] = {
    "mysql": (
        "CREATE TABLE `users`(`id` VARCHAR(40) PRIMARY KEY NOT NULL, "
        "`image` LONGBLOB NOT NULL, `price_default` DECIMAL(10,2) NOT NULL, "
        "`price_custom` DECIMAL(12,10) NOT NULL, `created_at` DATETIME NOT NULL, "
        "`deleted_at` DATETIME);"
    ),
    "postgres": (
        'CREATE TABLE "users"("id" TEXT PRIMARY KEY NOT NULL, '
        '"image" BYTEA NOT NULL, "price_default" DECIMAL(10,2) NOT NULL, '
        '"price_custom" DECIMAL(12,10) NOT NULL, "created_at" TIMESTAMP NOT NULL, '
        '"deleted_at" TIMESTAMP);'
    ),
    "sqlite": (
        'CREATE TABLE "users"("id" TEXT(40) PRIMARY KEY NOT NULL, '
        '"image" BLOB NOT NULL, "price_default" DECIMAL(10,2) NOT NULL, '
        '"price_custom" DECIMAL(12,10) NOT NULL, "created_at" DATETIME NOT NULL, '
        '"deleted_at" DATETIME);'
    ),
}


def users_columns() -> list[ColumnDefinition]:
    """Column definitions of the sample ``users`` table, legacy option style."""
    return [
        ColumnDefinition.create("id", "string", {"primary": "yes", "length": "40"}),
        ColumnDefinition.create("image", "blob", {}),
        ColumnDefinition.create("price_default", "decimal", {}),
        ColumnDefinition.create("price_custom", "decimal", {"length": "12", "decimals": "10"}),
        ColumnDefinition.create("created_at", "datetime", {}),
        ColumnDefinition.create("deleted_at", "datetime", {"nullable": "yes"}),
    ]


def users_table(dialect: DialectName) -> StatementBuilder:
    """A builder targeting ``users`` with every sample column declared."""
    builder = StatementBuilder(dialect).table("users")
    for column in users_columns():
        builder.column(column)
    return builder
