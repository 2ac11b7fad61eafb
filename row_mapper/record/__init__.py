"""Record layer - one table row as a mutable attribute bag."""

from __future__ import annotations

from row_mapper.record.base import Record
from row_mapper.record.statement import Filter, Statement

__all__ = [
    "Record",
    "Statement",
    "Filter",
]
