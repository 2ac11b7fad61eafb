"""Project text rows onto typed models.

Rows fetched by a Record are ``dict[str, str]`` with every column of the
table, so the mapper drops columns the target does not declare and, for
dataclasses, converts text to the annotated scalar type. Pydantic models
do their own coercion.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from row_mapper.core.exceptions import ColumnMismatchError

T = TypeVar("T")

_TRUE_TEXT = frozenset({"1", "true", "t", "yes", "y"})


def _convert(text: Any, annotation: Any) -> Any:
    """Convert *text* to *annotation* for int/float/bool (optionally Optional)."""
    if not isinstance(text, str):
        return text
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    optional = len(args) < len(typing.get_args(annotation))
    if optional:
        if text == "":
            return None
        if len(args) == 1:
            annotation = args[0]
    if annotation is bool:
        return text.strip().lower() in _TRUE_TEXT
    if annotation in (int, float):
        try:
            return annotation(text)
        except ValueError:
            return text
    return text


class ModelMapper(Generic[T]):
    """Row-to-model mapper.

    Detection order:
    1. Pydantic BaseModel -> model_validate(row), unknown columns ignored
    2. dataclass -> target_class(**row) restricted to declared fields,
       int/float/bool fields converted from text
    3. Plain class -> target_class(**row)

    Args:
        target_class: The class to construct from row data.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._aliases = aliases or {}
        self._is_pydantic = isinstance(target_class, type) and issubclass(target_class, BaseModel)
        self._field_types: dict[str, Any] | None = None
        if dataclasses.is_dataclass(target_class):
            hints = typing.get_type_hints(target_class)
            self._field_types = {
                f.name: hints.get(f.name, Any) for f in dataclasses.fields(target_class) if f.init
            }

    def _prepare(self, row: dict[str, Any]) -> dict[str, Any]:
        data = {self._aliases.get(key, key): value for key, value in row.items()}
        if self._field_types is None:
            return data
        return {
            name: _convert(value, self._field_types[name])
            for name, value in data.items()
            if name in self._field_types
        }

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row to a target_class instance."""
        data = self._prepare(row)

        if self._is_pydantic:
            try:
                return self._target_class.model_validate(data)  # type: ignore[attr-defined, no-any-return]
            except Exception as e:
                raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

        try:
            return self._target_class(**data)
        except TypeError as e:
            raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]
