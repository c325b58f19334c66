"""Label filter parsing and validation.

Extraction policies may restrict the content they apply to with an equality
filter on labels, written as ``key1:value1,key2:value2``.

Rules:
- Keys are ASCII, at most 63 characters, begin and end with an alphanumeric
  character and contain only alphanumerics, ``-``, ``_`` and ``.``.
- Values follow the same rules but may be empty (``key:``).
- Every label has exactly one ``:``; keys appear once.
- Values that parse as JSON (``3``, ``true``) keep their JSON type.

All violations for one key or value are reported together.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional, Tuple

from indexify_cli.core.exceptions import ValidationError

MAX_LABEL_LENGTH = 63
_EXTRA_CHARS = frozenset("-_.")


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _label_violations(text: str) -> List[str]:
    checks = [
        (text.isascii(), "must be ASCII"),
        (
            len(text) <= MAX_LABEL_LENGTH,
            f"must be {MAX_LABEL_LENGTH} characters or less",
        ),
        (
            bool(text) and _is_alnum(text[0]),
            "must begin with an alphanumeric character",
        ),
        (
            bool(text) and _is_alnum(text[-1]),
            "must end with an alphanumeric character",
        ),
        (
            all(_is_alnum(c) or c in _EXTRA_CHARS for c in text),
            "must contain only alphanumeric characters, dashes, underscores, and dots",
        ),
    ]
    return [msg for valid, msg in checks if not valid]


def validate_label_key(key: str) -> None:
    """Raise ValidationError if ``key`` is not a valid label key."""
    errors = _label_violations(key)
    if errors:
        raise ValidationError(
            f'label key invalid - {", ".join(errors)} - found key : "{key}"'
        )


def validate_label_value(value: str) -> None:
    """Raise ValidationError if ``value`` is not a valid label value.

    The empty string is valid.
    """
    if not value:
        return
    errors = _label_violations(value)
    if errors:
        raise ValidationError(
            f'label value invalid - {", ".join(errors)} - found value : "{value}"'
        )


def parse_label(raw: str) -> Tuple[str, str]:
    """Split ``key:value`` into its parts without validating them."""
    parts = raw.split(":")
    errors = []
    if len(parts) < 2:
        errors.append("must have a ':' character")
    if len(parts) > 2:
        errors.append("must have only one ':' character")
    if errors:
        raise ValidationError(f'query invalid - {", ".join(errors)} - raw : "{raw}"')
    return parts[0], parts[1]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not JSON")


def _decode_value(value: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON; keep them as text
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return value


def _invalid(reason: str, detail: str) -> ValidationError:
    return ValidationError(f"invalid labels_eq filter - {reason}: {detail}")


def _no_labels() -> ValidationError:
    return _invalid(
        "query invalid",
        "must have at least one label - if you want to match on no labels, "
        "remove the labels_eq filter entirely",
    )


def parse_labels_eq(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a ``labels_eq`` filter into a mapping.

    Args:
        raw: Filter text, or None when no filter is set

    Returns:
        Mapping of label key to decoded value, or None

    Raises:
        ValidationError: If the filter is empty or any label is invalid
    """
    if raw is None:
        return None

    # labels_eq= matches nothing; callers wanting no filter drop it instead
    if raw == "":
        raise _no_labels()

    labels: Dict[str, Any] = {}
    for label in raw.split(","):
        try:
            key, value = parse_label(label)
        except ValidationError as e:
            raise _invalid("query invalid", str(e)) from e

        if key in labels:
            raise _invalid("query has duplicate key", label)

        try:
            validate_label_key(key)
        except ValidationError as e:
            raise _invalid("key invalid", str(e)) from e
        try:
            validate_label_value(value)
        except ValidationError as e:
            raise _invalid("value invalid", str(e)) from e

        labels[key] = _decode_value(value)

    return labels


def check_labels_eq(labels: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a filter that is already a mapping, e.g. from a YAML file.

    Keys follow the same rules as in ``parse_labels_eq``. String values are
    checked as label values; numbers and booleans stand for decoded JSON.

    Raises:
        ValidationError: If the mapping is empty or any label is invalid
    """
    if not labels:
        raise _no_labels()

    for key, value in labels.items():
        if not isinstance(key, str):
            raise _invalid(
                "key invalid", f"label key must be a string, found {key!r}"
            )
        try:
            validate_label_key(key)
        except ValidationError as e:
            raise _invalid("key invalid", str(e)) from e

        if isinstance(value, str):
            try:
                validate_label_value(value)
            except ValidationError as e:
                raise _invalid("value invalid", str(e)) from e
        elif not isinstance(value, (bool, int, float)) or (
            isinstance(value, float) and not math.isfinite(value)
        ):
            raise _invalid(
                "value invalid",
                f'label value must be a string, number or boolean - key : "{key}"',
            )

    return labels
