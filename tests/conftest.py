"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from row_mapper.core.connection import ConnectionConfig
from row_mapper.core.provider import ConnectionProvider, MutationResult, RowSet

PERSONAS_DDL = (
    "CREATE TABLE personas ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, NOMBRE TEXT, EDAD INTEGER, GENERO TEXT)"
)


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config (one connection, one database)."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def provider(sqlite_config: ConnectionConfig) -> Iterator[ConnectionProvider]:
    """Provider over an in-memory database holding an empty ``personas`` table."""
    with ConnectionProvider.from_config(sqlite_config) as prov:
        prov.execute_mutation(PERSONAS_DDL)
        yield prov


@pytest.fixture
def fake_provider() -> MagicMock:
    """Stand-in provider that returns no rows and reports one affected row.

    Tests override ``execute.return_value`` / ``side_effect`` as needed and
    inspect ``call_args`` for the SQL and params that were sent.
    """
    fake = MagicMock()
    fake.execute.return_value = RowSet(columns=[])
    fake.execute_mutation.return_value = MutationResult(rowcount=1)
    return fake
