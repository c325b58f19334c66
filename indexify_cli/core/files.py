"""Typed file inputs.

Definitions (graphs, namespaces) can be passed as JSON or YAML files. The
format is picked from the file's mime type, guessed from its name.
"""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path
from typing import Optional, Type, TypeVar

import yaml

from indexify_cli.core.exceptions import DeserializationError, ValidationError
from indexify_cli.core.serde import from_python

T = TypeVar("T")

# mimetypes does not know YAML on every platform
_FALLBACK_TYPES = {
    ".json": "application/json",
    ".yaml": "application/x-yaml",
    ".yml": "application/x-yaml",
}

_YAML_SUBTYPES = frozenset({"x-yaml", "yaml"})


def guess_mime_type(path: Path) -> Optional[str]:
    """Mime type for ``path`` based on its suffix, or None."""
    mime, _ = mimetypes.guess_type(path.name)
    return mime or _FALLBACK_TYPES.get(path.suffix.lower())


def load_file(path: Path, model: Type[T]) -> T:
    """Read ``path`` and validate its content into ``model``.

    Args:
        path: JSON or YAML file
        model: pydantic model (or any type pydantic can validate)

    Returns:
        Validated instance

    Raises:
        ValidationError: If the file cannot be read or its type is unsupported
        DeserializationError: If the content is malformed or does not match
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(f"Cannot read {path}: {e}") from e

    mime = guess_mime_type(path)
    if mime is None:
        raise ValidationError(f"MIME type not detected for {path}")

    subtype = mime.split("/", 1)[-1]
    if subtype == "json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DeserializationError(
                f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}"
            ) from e
    elif subtype in _YAML_SUBTYPES:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise DeserializationError(f"Invalid YAML: {e}") from e
    else:
        raise ValidationError(f"Unsupported file type: {subtype}")

    return from_python(model, data, source=raw)
