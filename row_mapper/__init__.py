"""row-mapper - a minimal active-record layer over SQL backends."""

from __future__ import annotations

from row_mapper.core.connection import ConnectionConfig, ConnectionManager
from row_mapper.core.enums import DatabaseBackend
from row_mapper.core.exceptions import (
    AdapterError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    ExecutionError,
    MappingError,
    PoolError,
    RowMapperError,
    SQLSanitizationError,
    StatementExecutionError,
)
from row_mapper.core.provider import ConnectionProvider, MutationResult, RowSet
from row_mapper.core.sanitizer import SQLSanitizer
from row_mapper.core.settings import ConnectionSettings, get_settings
from row_mapper.mapping.model import ModelMapper
from row_mapper.record.base import Record

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "ConnectionProvider",
    "ConnectionSettings",
    "get_settings",
    "RowSet",
    "MutationResult",
    # Record
    "Record",
    # Sanitizer
    "SQLSanitizer",
    # Mapping
    "ModelMapper",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "RowMapperError",
    "ExecutionError",
    "StatementExecutionError",
    "SQLSanitizationError",
    "MappingError",
    "ColumnMismatchError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
