"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from row_mapper.core.connection import ConnectionConfig


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    parts.append(f"dbname={config.database}")
    parts.append(f"connect_timeout={config.pool_timeout}")
    return " ".join(parts)


class PostgresqlSyncAdapter:
    """Synchronous PostgreSQL adapter using psycopg (v3+)."""

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def create_pool(self, config: ConnectionConfig) -> list[Any]:
        import psycopg
        import psycopg.rows

        conninfo = _build_conninfo(config)
        pool: list[Any] = []
        for _ in range(config.pool_size):
            conn = psycopg.connect(conninfo, autocommit=True, row_factory=psycopg.rows.dict_row)
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[Any]) -> Any:
        if not pool:
            raise RuntimeError("No connections available in pool")
        return pool.pop()

    def release_connection(self, connection: Any, pool: list[Any]) -> None:
        pool.append(connection)

    def close_pool(self, pool: list[Any]) -> None:
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return connection.execute(sql, params)

    def last_insert_id(self, cursor: Any) -> int | None:
        """Return the sequence value generated by an INSERT on *cursor*'s session.

        Must run before the session issues another statement. Returns None when
        the statement was not an INSERT or no sequence has been used yet.
        """
        if not (cursor.statusmessage or "").startswith("INSERT"):
            return None
        try:
            row = cursor.connection.execute("SELECT lastval() AS id").fetchone()
        except Exception as e:
            # 55000: lastval is not yet defined in this session
            if getattr(e, "sqlstate", None) == "55000":
                return None
            raise
        return int(row["id"]) if row is not None else None
