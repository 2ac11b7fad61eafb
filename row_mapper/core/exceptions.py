"""row-mapper exception hierarchy.

Driver exceptions are wrapped before they leave the provider. The Record
layer converts every RowMapperError into a failure result plus a logged
diagnostic, so these are mostly seen by code using the provider directly.
"""

from __future__ import annotations


class RowMapperError(Exception):
    """Base exception for all row-mapper errors."""


# --- Execution ---


class ExecutionError(RowMapperError):
    """Base for statement execution errors."""


class StatementExecutionError(ExecutionError):
    """Raised when the backend rejects a statement."""

    def __init__(self, statement: str, detail: str) -> None:
        self.statement = statement
        self.detail = detail
        super().__init__(f"Statement failed: {detail} [{statement}]")


class SQLSanitizationError(ExecutionError):
    """Raised when a raw query fails a sanitization check."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"SQL sanitization failed: {detail}")


# --- Mapping ---


class MappingError(RowMapperError):
    """Base for mapping errors."""


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


# --- Adapter ---


class AdapterError(RowMapperError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
