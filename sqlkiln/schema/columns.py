"""Pydantic models for column definitions used by CREATE TABLE.

Column options used to travel as a loose ``dict[str, str]`` with ad hoc
``"yes"``/``"no"`` flags.  :class:`ColumnOptions` replaces that mapping with
named, validated fields while still accepting the legacy mapping shape::

    ColumnOptions.from_mapping({"primary": "yes", "length": "40"})
    # -> ColumnOptions(length=40, decimals=None, auto=False, primary=True, nullable=False)
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
)
from pydantic import ValidationError as PydanticValidationError

from sqlkiln.errors import ColumnDefinitionError


class ColumnType(str, Enum):
    """Portable column types, mapped to a native type per dialect."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BLOB = "blob"
    DATE = "date"
    DATETIME = "datetime"
    DECIMAL = "decimal"


_TRUTHY = frozenset({"yes", "y", "true", "1"})
_FALSY = frozenset({"no", "n", "false", "0", ""})


def _parse_flag(value: Any) -> Any:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError(f"expected 'yes' or 'no', got {value!r}")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


Flag = Annotated[bool, BeforeValidator(_parse_flag)]


class ColumnOptions(BaseModel):
    """DDL options for a single column.

    Attributes:
        length: Length / precision.  ``None`` means "dialect default":
            DECIMAL falls back to 10, MySQL VARCHAR to 255, every other
            type renders no length at all.
        decimals: Scale for DECIMAL columns; defaults to 2 when unset.
        auto: Auto-increment the column.
        primary: Mark the column as the primary key.
        nullable: Allow NULL values.  Columns are ``NOT NULL`` by default.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    length: Annotated[PositiveInt | None, BeforeValidator(_blank_to_none)] = None
    decimals: Annotated[NonNegativeInt | None, BeforeValidator(_blank_to_none)] = None
    auto: Flag = False
    primary: Flag = False
    nullable: Flag = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ColumnOptions:
        """Build options from a legacy string-keyed mapping.

        Args:
            options: Mapping keyed by field name (``length``, ``decimals``,
                ``auto``, ``primary``, ``nullable``).

        Returns:
            A validated :class:`ColumnOptions`.

        Raises:
            pydantic.ValidationError: On unknown keys or malformed values.
        """
        return cls.model_validate(dict(options))


class ColumnDefinition(BaseModel):
    """One column in a CREATE TABLE statement.

    Attributes:
        name: Column name (quoted as an identifier when compiled).
        type: A :class:`ColumnType` value or any other type name, which is
            emitted unchanged.
        options: Length, key and nullability options.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    type: str
    options: ColumnOptions = Field(default_factory=ColumnOptions)

    @classmethod
    def create(
        cls,
        name: str,
        column_type: ColumnType | str,
        options: ColumnOptions | Mapping[str, Any] | None = None,
    ) -> ColumnDefinition:
        """Validate and build a column definition.

        Args:
            name: Column name.
            column_type: Portable or native type name.
            options: A :class:`ColumnOptions` or a legacy option mapping.

        Returns:
            The validated :class:`ColumnDefinition`.

        Raises:
            ColumnDefinitionError: If any option is unknown or malformed.
        """
        if isinstance(column_type, ColumnType):
            column_type = column_type.value
        try:
            if options is None:
                opts = ColumnOptions()
            elif isinstance(options, ColumnOptions):
                opts = options
            else:
                opts = ColumnOptions.from_mapping(options)
            return cls(name=name, type=column_type, options=opts)
        except PydanticValidationError as exc:
            details = {
                ".".join(str(part) for part in err["loc"]) or "column": err["msg"]
                for err in exc.errors()
            }
            raise ColumnDefinitionError(name, details) from exc
