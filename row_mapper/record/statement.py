"""Statement builders for Record.

Every value is bound through a ``:name`` placeholder. ``Statement.render()``
inlines the values back as literals to produce the logical statement text
used in diagnostics, e.g.::

    INSERT INTO personas (NOMBRE, EDAD) VALUES ('Ana', '30')

Table and column names cannot be bound and are inlined as given.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from row_mapper.core.params import inline_params


@dataclass(frozen=True)
class Statement:
    """SQL text with ``:name`` placeholders plus the values bound to them."""

    sql: str
    params: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        """Return the statement with its parameters inlined as literals."""
        if not self.params:
            return self.sql
        return inline_params(self.sql, self.params)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Filter:
    """One ``<field> LIKE '%<value>%'`` condition."""

    field: str
    value: str

    @property
    def pattern(self) -> str:
        return f"%{self.value}%"


def coerce_key(value: Any) -> int | str:
    """Bind integer-looking ids as ints, anything else as text."""
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return text


def render_condition(filters: Sequence[Filter]) -> str:
    """Render filters as the logical WHERE text (``a LIKE '%x%' AND ...``)."""
    sql, params = _where_clause(filters)
    return inline_params(sql, params)


def _where_clause(filters: Sequence[Filter]) -> tuple[str, dict[str, Any]]:
    parts: list[str] = []
    params: dict[str, Any] = {}
    for index, condition in enumerate(filters):
        name = f"w{index}"
        parts.append(f"{condition.field} LIKE :{name}")
        params[name] = condition.pattern
    return " AND ".join(parts), params


def select_by_id(table: str, key: Any) -> Statement:
    return Statement(f"SELECT * FROM {table} WHERE id = :id LIMIT 1", {"id": coerce_key(key)})


def select(table: str, filters: Sequence[Filter] = (), *, limit: int | None = None) -> Statement:
    """``SELECT * FROM <table> [WHERE ...] [LIMIT n]``."""
    sql = f"SELECT * FROM {table}"
    params: dict[str, Any] = {}
    if filters:
        where, params = _where_clause(filters)
        sql += f" WHERE {where}"
    if limit is not None:
        sql += f" LIMIT {int(limit)}"
    return Statement(sql, params)


def raw(query: str, *, limit: int | None = None) -> Statement:
    """Wrap a caller-supplied query; nothing is bound."""
    if limit is not None:
        query += f" LIMIT {int(limit)}"
    return Statement(query)


def insert(table: str, columns: Iterable[str], attributes: Mapping[str, str]) -> Statement:
    names: list[str] = []
    placeholders: list[str] = []
    params: dict[str, Any] = {}
    for index, column in enumerate(columns):
        name = f"v{index}"
        names.append(column)
        placeholders.append(f":{name}")
        params[name] = attributes.get(column, "")
    return Statement(
        f"INSERT INTO {table} ({', '.join(names)}) VALUES ({', '.join(placeholders)})",
        params,
    )


def update(table: str, columns: Iterable[str], attributes: Mapping[str, str]) -> Statement:
    """``UPDATE <table> SET ... WHERE id = <id>``; the id column is never SET."""
    assignments: list[str] = []
    params: dict[str, Any] = {}
    for index, column in enumerate(c for c in columns if c != "id"):
        name = f"v{index}"
        assignments.append(f"{column} = :{name}")
        params[name] = attributes.get(column, "")
    params["id"] = coerce_key(attributes["id"])
    return Statement(f"UPDATE {table} SET {', '.join(assignments)} WHERE id = :id", params)


def delete(table: str, key: Any) -> Statement:
    return Statement(f"DELETE FROM {table} WHERE id = :id", {"id": coerce_key(key)})
