"""Pure functions classifying runtime values and declared types."""

from __future__ import annotations

import types
import typing
from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from collections.abc import Set as AbstractSet
from typing import Any, get_args, get_origin

from graphclone.core.shape.models import (
    ABSTRACT_MAPPING_TYPES,
    ABSTRACT_SEQUENCE_TYPES,
    ABSTRACT_SET_TYPES,
    ALLOWED_KEY_TYPES,
    ARRAY_TYPES,
    LEAF_TYPES,
    Shape,
)
from graphclone.core.wrapper import Maybe


def classify(value: Any) -> Shape:
    """Classify a value by its runtime type.

    Order matters: leaves first (``str`` and ``range`` are sequences too),
    arrays before ordered lists (``tuple`` is a sequence), and mappings before
    sets (mapping views are sets).

    Args:
        value: Any value, including None.

    Returns:
        The value's shape.
    """
    if isinstance(value, LEAF_TYPES):
        return Shape.LEAF
    if isinstance(value, Maybe):
        return Shape.OPTIONAL_WRAPPER
    if isinstance(value, ARRAY_TYPES):
        return Shape.ARRAY
    if isinstance(value, Mapping):
        return Shape.KEY_VALUE_MAP
    if isinstance(value, AbstractSet):
        return Shape.UNIQUE_SET
    if isinstance(value, (Sequence, Collection)):
        return Shape.ORDERED_LIST
    return Shape.COMPOSITE


def is_leaf_type(cls: type) -> bool:
    """Check if instances of a type are treated as immutable leaves."""
    return issubclass(cls, LEAF_TYPES)


def is_allowed_key(key: Any) -> bool:
    """Check if a mapping key has a fingerprint-stable runtime type."""
    return isinstance(key, ALLOWED_KEY_TYPES)


def is_one_shot_iterator(value: Any) -> bool:
    """Check if reading a value would consume it (generators, iterators, files)."""
    return isinstance(value, Iterator)


def _strip_optional(declared: Any) -> Any:
    """Reduce ``X | None`` / ``Optional[X]`` to ``X``."""
    origin = get_origin(declared)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in get_args(declared) if arg is not types.NoneType]
        if len(members) == 1:
            return members[0]
    return declared


def abstract_capability(declared: Any, shape: Shape) -> type | None:
    """Return the abstract collection capability a slot was declared with.

    Args:
        declared: Declared type of the slot (annotation), or None if unknown.
        shape: Shape of the runtime value stored in the slot.

    Returns:
        The abstract ``collections.abc`` class if the declaration names only a
        capability (e.g. ``Sequence[int]``) for a collection shape, else None.
    """
    if declared is None:
        return None
    declared = _strip_optional(declared)
    origin = get_origin(declared) or declared
    if not isinstance(origin, type):
        return None

    candidates: tuple[type, ...]
    if shape is Shape.ORDERED_LIST:
        candidates = ABSTRACT_SEQUENCE_TYPES
    elif shape is Shape.UNIQUE_SET:
        candidates = ABSTRACT_SET_TYPES + (Collection, Iterable)
    elif shape is Shape.KEY_VALUE_MAP:
        candidates = ABSTRACT_MAPPING_TYPES
    else:
        return None
    return origin if origin in candidates else None


def type_name(cls: Any) -> str:
    """Fully qualified name of a type or annotation, for messages and tags."""
    if isinstance(cls, type):
        if cls.__module__ == "builtins":
            return cls.__qualname__
        return f"{cls.__module__}.{cls.__qualname__}"
    return repr(cls)
