"""Raw query sanitizer.

Only applied to queries installed with ``Record.raw()`` when the record was
given a sanitizer. Statements built by the record itself are parameterized
and never pass through here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from row_mapper.core.exceptions import SQLSanitizationError

# Matches the first SQL keyword (used for verb allow-listing)
_FIRST_KEYWORD = re.compile(r"^\s*(\w+)")

# Quoted regions that must survive untouched ('string', "identifier", `identifier`)
# and comments, matched in one pass so a quote inside a comment is not text.
# Doubled quotes inside quoted regions are escapes.
_TOKEN = re.compile(
    r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|`(?:[^`]|``)*`|--[^\n]*|/\*.*?(?:\*/|\Z)",
    re.DOTALL,
)


def _split(sql: str) -> list[tuple[str, str]]:
    """Split *sql* into ``(kind, text)`` segments.

    ``kind`` is ``"code"``, ``"quoted"`` or ``"comment"``. A line comment
    stops before its newline, which stays in the following code segment.

    Raises:
        SQLSanitizationError: If a quote is opened and never closed.
    """
    segments: list[tuple[str, str]] = []
    last = 0
    for match in _TOKEN.finditer(sql):
        segments.append(("code", sql[last : match.start()]))
        token = match.group()
        segments.append(("comment" if token[0] in "-/" else "quoted", token))
        last = match.end()
    segments.append(("code", sql[last:]))
    for kind, text in segments:
        if kind != "code":
            continue
        for quote in ("'", '"', "`"):
            if quote in text:
                raise SQLSanitizationError(f"Unterminated {quote}-quoted text detected in SQL")
    return segments


def _strip_comments(sql: str) -> str:
    """Remove ``--`` and ``/* */`` comments outside quoted text."""
    parts: list[str] = []
    for kind, text in _split(sql):
        if kind == "comment":
            text = " " if text.startswith("/*") else ""
        parts.append(text)
    return "".join(parts)


def _check_single_statement(sql: str) -> None:
    """Raise if *sql* contains a semicolon followed by more content."""
    segments = [(kind, text) for kind, text in _split(sql) if kind != "comment"]
    for index, (kind, text) in enumerate(segments):
        if kind == "quoted" or ";" not in text:
            continue
        rest = text[text.index(";") + 1 :] + "".join(t for _, t in segments[index + 1 :])
        if rest.strip().strip(";").strip():
            raise SQLSanitizationError("Multiple SQL statements are not permitted in raw queries")


def _check_verb(sql: str, allowed: frozenset[str]) -> None:
    """Raise if the leading SQL keyword is not in *allowed*."""
    m = _FIRST_KEYWORD.match(sql)
    if m:
        verb = m.group(1).upper()
        if verb not in allowed:
            raise SQLSanitizationError(
                f"SQL verb '{verb}' is not permitted; allowed: {sorted(allowed)}"
            )


@dataclass
class SQLSanitizer:
    """Configurable sanitizer for raw queries.

    This is not an injection guard: a raw query built by string concatenation
    of user input stays unsafe. It only strips comments, blocks stacked
    statements and optionally restricts the leading verb.

    Attributes:
        strip_comments: Strip ``--`` and ``/* */`` comments before execution.
        block_multiple_statements: Reject ``SELECT 1; DROP TABLE t`` style input.
        allowed_verbs: If not ``None``, only statements whose first keyword is
            in this set are permitted, e.g. ``frozenset({"SELECT"})``.
    """

    strip_comments: bool = True
    block_multiple_statements: bool = True
    allowed_verbs: frozenset[str] | None = None

    def sanitize(self, sql: str) -> str:
        """Apply all configured checks to *sql* and return the (cleaned) SQL.

        Raises:
            SQLSanitizationError: If any enabled check fails.
        """
        if self.strip_comments:
            sql = _strip_comments(sql).strip()
        if self.block_multiple_statements:
            _check_single_statement(sql)
        if self.allowed_verbs is not None:
            _check_verb(sql, self.allowed_verbs)
        return sql
