"""Shared pytest fixtures for sqlkiln unit and integration tests."""
from __future__ import annotations

import pytest

from sqlkiln.compile.builder import StatementBuilder

ALL_DIALECTS = ["mysql", "postgres", "sqlite"]


@pytest.fixture()
def mysql() -> StatementBuilder:
    return StatementBuilder("mysql")


@pytest.fixture()
def postgres() -> StatementBuilder:
    return StatementBuilder("postgres")


@pytest.fixture()
def sqlite() -> StatementBuilder:
    return StatementBuilder("sqlite")


@pytest.fixture(params=ALL_DIALECTS)
def dialect(request: pytest.FixtureRequest) -> str:
    """Each supported dialect tag in turn."""
    return request.param
