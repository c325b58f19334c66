"""Decoding helpers that report where a document went wrong.

pydantic errors are translated into DeserializationError carrying the dotted
path of the first offending field, e.g. ``namespaces.0.name``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

import pydantic
from pydantic import TypeAdapter

from indexify_cli.core.exceptions import DeserializationError

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _error_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "."


def _translate(
    error: pydantic.ValidationError, body: Optional[str]
) -> DeserializationError:
    first = error.errors()[0]
    result = DeserializationError(first["msg"], path=_error_path(first["loc"]))
    if error.error_count() > 1:
        result.with_section("Errors:", str(error))
    if body is not None:
        result.with_section("Body:", body)
    return result


def from_json(tp: Type[T], text: str) -> T:
    """Decode JSON text into ``tp``.

    Raises:
        DeserializationError: With the field path and the body attached
    """
    try:
        return _adapter(tp).validate_json(text)
    except pydantic.ValidationError as e:
        raise _translate(e, text) from e


def from_python(tp: Type[T], data: Any, source: Optional[str] = None) -> T:
    """Validate already parsed data (e.g. loaded YAML) into ``tp``."""
    try:
        return _adapter(tp).validate_python(data)
    except pydantic.ValidationError as e:
        raise _translate(e, source) from e


def to_jsonable(value: Any) -> Any:
    """Convert models (or lists of them) into JSON-compatible data."""
    return _adapter(type(value)).dump_python(value, mode="json")
