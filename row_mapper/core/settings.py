"""Environment-driven connection settings.

Reads ``ROW_MAPPER_*`` variables (optionally from a ``.env`` file) and turns
them into a ConnectionConfig.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from row_mapper.core.connection import ConnectionConfig


class ConnectionSettings(BaseSettings):
    driver: str = "sqlite"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str = ":memory:"
    pool_size: int = 1

    model_config = SettingsConfigDict(
        env_prefix="ROW_MAPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_config(self) -> ConnectionConfig:
        """Build a ConnectionConfig from the loaded settings."""
        return ConnectionConfig(
            driver=self.driver,
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
            pool_size=self.pool_size,
        )


@lru_cache(maxsize=1)
def get_settings() -> ConnectionSettings:
    """Return a cached ConnectionSettings instance."""
    return ConnectionSettings()


__all__ = ["ConnectionSettings", "get_settings"]
