"""SQL parameter normalization.

Statements are built with `:name` placeholders and converted to the
driver-specific format right before execution. String literals and
PostgreSQL `::typecast` syntax are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

# Matches :name but not ::typecast and not inside words
# Negative lookbehind for : (handles ::), \w (handles mid-word colons)
_PARAM_PATTERN = re.compile(r"(?<![:\w]):([a-zA-Z_]\w*)")

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert :name parameters to the target param style.

    Args:
        sql: SQL string with :name parameters.
        paramstyle: Target style - 'named' (no conversion) or 'pyformat' (%(name)s).

    Returns:
        SQL with parameters converted to the target style.
    """
    if paramstyle == "named":
        return sql
    if paramstyle == "pyformat":
        return _convert_to_pyformat(sql)
    raise ValueError(f"Unsupported paramstyle: {paramstyle}")


@lru_cache(maxsize=256)
def _convert_to_pyformat(sql: str) -> str:
    """Convert :name params to %(name)s, preserving string literals."""
    parts: list[str] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:start]))
        parts.append(match.group())
        last_end = end

    if last_end < len(sql):
        parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:]))

    return "".join(parts)


def quote_literal(value: Any) -> str:
    """Render a bound value as SQL literal text (for display, never executed)."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def inline_params(sql: str, params: Mapping[str, Any]) -> str:
    """Replace :name placeholders in *sql* with literal renderings of *params*.

    String literals already present in *sql* are preserved. Placeholders
    without a matching entry in *params* are left as they are.
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in params:
            return match.group()
        return quote_literal(params[name])

    parts: list[str] = []
    last_end = 0
    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        parts.append(_PARAM_PATTERN.sub(_substitute, sql[last_end : match.start()]))
        parts.append(match.group())
        last_end = match.end()
    parts.append(_PARAM_PATTERN.sub(_substitute, sql[last_end:]))
    return "".join(parts)
