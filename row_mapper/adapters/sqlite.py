"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_mapper.core.connection import ConnectionConfig


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite.

        Each ``:memory:`` connection is its own database, so in-memory
        configs should keep ``pool_size=1``.
        """
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            conn = sqlite3.connect(config.database, timeout=config.pool_timeout)
            conn.row_factory = sqlite3.Row
            if config.database != ":memory:":
                conn.execute("PRAGMA journal_mode=WAL")
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise RuntimeError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        if params is None:
            return connection.execute(sql)
        return connection.execute(sql, params)

    def last_insert_id(self, cursor: sqlite3.Cursor) -> int | None:
        return cursor.lastrowid
