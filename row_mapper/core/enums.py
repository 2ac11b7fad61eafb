"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Backends with a bundled adapter."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
