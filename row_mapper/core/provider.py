"""Connection provider.

The provider is the only place that talks to a driver. It borrows a
connection, runs exactly one statement, materializes the result and hands
it back as a RowSet or MutationResult. Driver exceptions are wrapped into
row-mapper exceptions here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.exceptions import StatementExecutionError
from row_mapper.core.params import inline_params, normalize_params

logger = logging.getLogger(__name__)


def decode_value(value: Any) -> str:
    """Decode a driver value into the text form stored in attribute bags."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


@dataclass
class RowSet:
    """Rows returned by a statement, decoded lazily on iteration.

    ``columns`` holds the column names in the order the backend reported
    them. Iterating yields one ``dict[str, str]`` per row, with every
    reported column present as a key.
    """

    columns: list[str]
    raw_rows: list[Any] = field(default_factory=list, repr=False)

    def __iter__(self) -> Iterator[dict[str, str]]:
        for row in self.raw_rows:
            yield self._decode(row)

    def __len__(self) -> int:
        return len(self.raw_rows)

    def _decode(self, row: Any) -> dict[str, str]:
        # dict-like rows (mysql dictionary cursor, psycopg dict_row)
        if isinstance(row, Mapping):
            return {column: decode_value(row.get(column)) for column in self.columns}
        return {
            column: decode_value(value)
            for column, value in zip(self.columns, tuple(row), strict=True)
        }

    def first(self) -> dict[str, str] | None:
        """Return the first decoded row, or None for an empty set."""
        for row in self:
            return row
        return None


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an INSERT/UPDATE/DELETE."""

    rowcount: int
    last_insert_id: int | None = None


def _rows_from_cursor(cursor: Any) -> RowSet:
    """Materialize a cursor into a RowSet."""
    if cursor.description is None:
        return RowSet(columns=[])
    columns = [desc[0] for desc in cursor.description]
    return RowSet(columns=columns, raw_rows=list(cursor.fetchall()))


class ConnectionProvider:
    """Executes statements over a ConnectionManager.

    Statements use ``:name`` placeholders; they are converted to the
    adapter's paramstyle before execution. A statement without params is
    sent verbatim.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager
        self._paramstyle: str = connection_manager.adapter.paramstyle

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> ConnectionProvider:
        """Create a provider from a ConnectionConfig."""
        return cls(ConnectionManager(config))

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    def _prepare(
        self, sql: str, params: Mapping[str, Any] | None
    ) -> tuple[str, dict[str, Any] | None]:
        if params is None:
            return sql, None
        return normalize_params(sql, self._paramstyle), dict(params)

    def execute(self, sql: str, params: Mapping[str, Any] | None = None) -> RowSet:
        """Run a row-returning statement and return its rows.

        The session is committed afterwards so no read transaction stays open.

        Raises:
            StatementExecutionError: The backend rejected the statement.
            ConnectionError: No connection could be opened.
        """
        driver_sql, driver_params = self._prepare(sql, params)
        adapter = self._connection_manager.adapter
        with self._connection_manager.get_connection() as conn:
            try:
                cursor = adapter.execute(conn, driver_sql, driver_params)
                rows = _rows_from_cursor(cursor)
                conn.commit()
            except Exception as e:
                _rollback_quietly(conn)
                raise StatementExecutionError(_display(sql, params), str(e)) from e
        logger.debug("%s -> %d row(s)", _display(sql, params), len(rows))
        return rows

    def execute_mutation(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> MutationResult:
        """Run an INSERT/UPDATE/DELETE and commit it.

        The generated key of an INSERT is read before the commit.

        Raises:
            StatementExecutionError: The backend rejected the statement.
            ConnectionError: No connection could be opened.
        """
        driver_sql, driver_params = self._prepare(sql, params)
        adapter = self._connection_manager.adapter
        with self._connection_manager.get_connection() as conn:
            try:
                cursor = adapter.execute(conn, driver_sql, driver_params)
                result = MutationResult(
                    rowcount=int(cursor.rowcount),
                    last_insert_id=adapter.last_insert_id(cursor) if _is_insert(sql) else None,
                )
                conn.commit()
            except Exception as e:
                _rollback_quietly(conn)
                raise StatementExecutionError(_display(sql, params), str(e)) from e
        logger.debug("%s -> %d row(s) affected", _display(sql, params), result.rowcount)
        return result

    def close(self) -> None:
        """Close every pooled connection."""
        self._connection_manager.close_pool()

    def __enter__(self) -> ConnectionProvider:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def _is_insert(sql: str) -> bool:
    return sql.lstrip()[:6].upper() == "INSERT"


def _display(sql: str, params: Mapping[str, Any] | None) -> str:
    return sql if params is None else inline_params(sql, params)


def _rollback_quietly(conn: Any) -> None:
    """Roll back after a failed statement so the connection stays usable."""
    try:
        conn.rollback()
    except Exception:
        logger.warning("Rollback after failed statement also failed", exc_info=True)
