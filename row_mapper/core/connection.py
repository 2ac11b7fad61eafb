"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager drives an adapter through the pool-based connection
lifecycle; the provider borrows one connection per statement.
"""

from __future__ import annotations

import importlib
import logging
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from row_mapper.core.enums import DatabaseBackend
from row_mapper.core.exceptions import AdapterError, ConnectionError, PoolError

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    pool_size: int = 1
    pool_timeout: int = 30
    pool_recycle: int = 1800
    extra: dict[str, Any] = {}


# Adapter module mapping: backend → (module_path, adapter_class)
_ADAPTER_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("row_mapper.adapters.sqlite", "SqliteSyncAdapter"),
    DatabaseBackend.POSTGRESQL: ("row_mapper.adapters.postgresql", "PostgresqlSyncAdapter"),
    DatabaseBackend.MYSQL: ("row_mapper.adapters.mysql", "MysqlSyncAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    try:
        backend = DatabaseBackend(driver.lower())
    except ValueError as e:
        raise AdapterError(f"Unsupported database driver: {driver}") from e

    module_path, cls_name = _ADAPTER_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Synchronous connection manager using the SyncAdapter protocol."""

    def __init__(self, config: ConnectionConfig, adapter: Any | None = None) -> None:
        self.config = config
        self._adapter = adapter if adapter is not None else _load_adapter(config.driver)
        self._pool: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    def initialize_pool(self) -> Any:
        """Initialize the connection pool."""
        if self._pool is None:
            try:
                self._pool = self._adapter.create_pool(self.config)
            except ImportError as e:
                raise ConnectionError(
                    f"Driver for '{self.config.driver}' is not installed: {e}"
                ) from e
            except Exception as e:
                raise ConnectionError(
                    f"Could not connect to '{self.config.database}' ({self.config.driver}): {e}"
                ) from e
            logger.debug(
                "Opened %s pool of %d connection(s) to %s",
                self.config.driver,
                self.config.pool_size,
                self.config.database,
            )
        return self._pool

    @contextmanager
    def get_connection(self):  # type: ignore[no-untyped-def]
        """Get a connection from the pool as a context manager."""
        if self._pool is None:
            self.initialize_pool()
        try:
            connection = self._adapter.acquire_connection(self._pool)
        except RuntimeError as e:
            raise PoolError(str(e)) from e
        try:
            yield connection
        finally:
            self._adapter.release_connection(connection, self._pool)

    def close_pool(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            self._adapter.close_pool(self._pool)
            self._pool = None
            logger.debug("Closed %s pool for %s", self.config.driver, self.config.database)
