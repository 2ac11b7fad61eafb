"""Mapping layer - project fetched rows onto typed objects."""

from __future__ import annotations

from row_mapper.mapping.model import ModelMapper
from row_mapper.mapping.protocol import Mapper

__all__ = [
    "Mapper",
    "ModelMapper",
]
