"""Database adapter protocol.

Every bundled adapter implements SyncAdapter so the connection provider can
drive any backend through the same calls.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_mapper.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor-like object.

        When *params* is None the statement is sent without binding, so
        literal ``%`` or ``:`` in raw queries reach the backend untouched.
        """
        ...

    def last_insert_id(self, cursor: Any) -> int | None:
        """Return the key generated by the INSERT that produced *cursor*, if known."""
        ...
