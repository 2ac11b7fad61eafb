"""Active-record style mapper over a single table.

A Record holds one row as a bag of text attributes. It is mutated in place
by ``set``/``find``/``create``/``remove`` and forked by ``where``/``raw``
into independent copies used for read queries.

Persistence and fetch methods never raise: failures are logged on this
module's logger and reported as ``False``, ``[]`` or ``{}``.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any, TypeVar, overload

from row_mapper.core.exceptions import RowMapperError
from row_mapper.core.provider import MutationResult
from row_mapper.core.sanitizer import SQLSanitizer
from row_mapper.mapping.protocol import Mapper
from row_mapper.record import statement as stmt
from row_mapper.record.statement import Filter, Statement

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Record:
    """One row of ``table``, addressed by its ``id`` column.

    Args:
        provider: Object with ``execute(sql, params)`` returning a RowSet and
            ``execute_mutation(sql, params)`` returning a MutationResult,
            normally a ConnectionProvider.
        table: Backing table name.
        columns: Initial column list; every column starts out as ``""``.
        sanitizer: Optional SQLSanitizer applied to raw queries.
    """

    def __init__(
        self,
        provider: Any,
        table: str,
        columns: Iterable[str] = (),
        *,
        sanitizer: SQLSanitizer | None = None,
    ) -> None:
        self._provider = provider
        self._table = table
        self._columns: list[str] = []
        self._attributes: dict[str, str] = {}
        self._filters: tuple[Filter, ...] = ()
        self._raw_query = ""
        self._sanitizer = sanitizer
        for column in columns:
            if column not in self._attributes:
                self._columns.append(column)
            self._attributes[column] = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self._table!r}, id={self.get('id')!r})"

    # --- State ---

    @property
    def table(self) -> str:
        return self._table

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    @property
    def condition(self) -> str:
        """Accumulated WHERE text, or ``""`` when unfiltered."""
        return stmt.render_condition(self._filters)

    @property
    def raw_query(self) -> str:
        return self._raw_query

    @property
    def is_bound(self) -> bool:
        """True when the record carries an ``id`` (it maps an existing row)."""
        return bool(self._attributes.get("id"))

    def set(self, field: str, value: str) -> None:
        """Assign *value* to *field*, appending *field* to the columns if new."""
        self._attributes[field] = value
        if field not in self._columns:
            self._columns.append(field)

    def get(self, field: str) -> str:
        return self._attributes.get(field, "")

    # --- Persistence ---

    def find(self, record_id: int) -> bool:
        """Load the row with the given id into this record.

        Attributes for every column the row reports are overwritten; other
        attributes and the column list are left as they are.
        """
        row = self._fetch_one(stmt.select_by_id(self._table, record_id))
        if row is None:
            return False
        self._attributes.update(row)
        return True

    def save(self) -> bool:
        """Insert when the record has no id, update otherwise."""
        if not self.is_bound:
            return self.create()
        return self.update()

    def create(self) -> bool:
        """INSERT every column in order; on success the generated id is loaded."""
        result = self._mutate(stmt.insert(self._table, self._columns, self._attributes))
        if result is None:
            return False
        if result.last_insert_id is not None:
            self._attributes["id"] = str(result.last_insert_id)
        return True

    def update(self) -> bool:
        """UPDATE every column except ``id`` on the row identified by ``id``."""
        if not self._require_id("update"):
            return False
        result = self._mutate(stmt.update(self._table, self._columns, self._attributes))
        return result is not None

    def remove(self) -> bool:
        """DELETE the row identified by ``id``; on success the id is cleared."""
        if not self._require_id("remove"):
            return False
        result = self._mutate(stmt.delete(self._table, self._attributes["id"]))
        if result is None:
            return False
        self._attributes["id"] = ""
        return True

    # --- Query building ---

    def where(self, field: str, value: str) -> Record:
        """Return a copy filtered by ``field LIKE '%value%'`` (AND-ed with existing filters)."""
        derived = self._copy()
        derived._filters = (*self._filters, Filter(field, value))
        return derived

    def raw(self, query: str) -> Record:
        """Return a copy whose reads run *query* verbatim instead of a built SELECT."""
        derived = self._copy()
        derived._raw_query = query
        return derived

    # --- Fetching ---

    @overload
    def get_all(self, mapper: None = None) -> list[dict[str, str]]: ...

    @overload
    def get_all(self, mapper: Mapper[T]) -> list[T]: ...

    def get_all(self, mapper: Mapper[Any] | None = None) -> list[Any]:
        """Return every matching row as an independent mapping.

        Returns ``[]`` when nothing matches or the query fails.
        """
        query = self._read_statement(limit=None)
        rows = self._fetch(query) if query is not None else []
        if mapper is not None:
            return mapper.map_many(rows)
        return rows

    @overload
    def first(self, mapper: None = None) -> dict[str, str]: ...

    @overload
    def first(self, mapper: Mapper[T]) -> T | None: ...

    def first(self, mapper: Mapper[Any] | None = None) -> Any:
        """Return the first matching row, or ``{}`` when there is none.

        ``LIMIT 1`` is appended to the query, raw queries included. With a
        mapper, a missing row is returned as None.
        """
        query = self._read_statement(limit=1)
        row = self._fetch_one(query) if query is not None else None
        if mapper is not None:
            return mapper.map_one(row) if row is not None else None
        return row if row is not None else {}

    # --- Internals ---

    def _copy(self) -> Record:
        derived = copy.copy(self)
        derived._columns = list(self._columns)
        derived._attributes = dict(self._attributes)
        return derived

    def _require_id(self, operation: str) -> bool:
        if self.is_bound:
            return True
        logger.error("Cannot %s record in '%s': 'id' is not set", operation, self._table)
        return False

    def _read_statement(self, limit: int | None) -> Statement | None:
        if not self._raw_query:
            return stmt.select(self._table, self._filters, limit=limit)
        query = self._raw_query
        if self._sanitizer is not None:
            try:
                query = self._sanitizer.sanitize(query)
            except RowMapperError as e:
                logger.error("Rejected raw query on '%s': %s", self._table, e)
                return None
        return stmt.raw(query, limit=limit)

    def _fetch(self, query: Statement) -> list[dict[str, str]]:
        try:
            rows = self._provider.execute(query.sql, query.params or None)
        except RowMapperError as e:
            logger.error("Query on '%s' failed: %s", self._table, e)
            return []
        return list(rows)

    def _fetch_one(self, query: Statement) -> dict[str, str] | None:
        rows = self._fetch(query)
        return rows[0] if rows else None

    def _mutate(self, query: Statement) -> MutationResult | None:
        try:
            return self._provider.execute_mutation(query.sql, query.params or None)
        except RowMapperError as e:
            logger.error("Write to '%s' failed: %s", self._table, e)
            return None
