"""Ready-made transformers.

Usage:
    from graphclone import deep_copy_and_apply
    from graphclone.transforms import compose, redact

    snapshot = deep_copy_and_apply(config, redact("password", "api_key"))

    upper_names = lambda field, value: (
        value.upper() if field is not None and field.name == "name" else value
    )
    snapshot = deep_copy_and_apply(config, compose(redact("password"), upper_names))
"""

from __future__ import annotations

import warnings
from typing import Any

from graphclone.core.introspection.models import FieldDescriptor
from graphclone.core.types import Transformer


def identity(field: FieldDescriptor | None, value: Any) -> Any:
    """Keep every value as copied."""
    return value


def redact(*field_names: str, replacement: Any = "***") -> Transformer:
    """Replace the values of the named fields, at any depth.

    The containing field is forwarded into collections, so elements of a
    collection held by a named field are replaced too, before the collection
    itself is replaced. A set held by a named field therefore fails with
    UnsafeMutationDetectedError once two of its elements collapse into the
    same replacement.

    Args:
        *field_names: Names of the fields to redact.
        replacement: Value stored in place of each redacted field.

    Returns:
        Transformer for ``deep_copy_and_apply``.
    """
    if not field_names:
        warnings.warn(
            "redact() called without field names; nothing will be redacted",
            stacklevel=2,
        )
    names = frozenset(field_names)

    def transform(field: FieldDescriptor | None, value: Any) -> Any:
        if field is None or field.name not in names:
            return value
        return replacement

    return transform


def compose(*transforms: Transformer) -> Transformer:
    """Chain transformers left to right; each sees the previous one's result.

    Args:
        *transforms: Transformers to apply in order.

    Returns:
        A single transformer. With no arguments, ``identity``.
    """
    if not transforms:
        return identity
    if len(transforms) == 1:
        return transforms[0]

    def transform(field: FieldDescriptor | None, value: Any) -> Any:
        for step in transforms:
            value = step(field, value)
        return value

    return transform
