"""Safety checks for unique-set elements.

A set's invariants depend on each element's hash and equality staying fixed
while it is a member. A transform applied to a set element must therefore not
change what the element compares equal to, unless the element is an
immutable leaf (then a changed value is simply a different element).
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from graphclone.core.errors import UnsafeMutationDetectedError
from graphclone.core.shape.operations import is_leaf_type, type_name


def _hash_or_none(element: Any) -> int | None:
    try:
        return hash(element)
    except TypeError:
        return None


def fingerprint(element: Any) -> int | None:
    """Equality fingerprint of a set element taken before its transform.

    Returns:
        The element's hash, or None for absent and leaf elements, which need
        no mutation tracking.
    """
    if element is None or is_leaf_type(type(element)):
        return None
    return _hash_or_none(element)


def _unsafe_message(path: str, element_type: type, what: str) -> str:
    return (
        f"Set element transformation at path: {path} is potentially unsafe. "
        f"Element type '{type_name(element_type)}' is not immutable, and the transformer "
        f"{what}. This may break set semantics if the transformation affects fields used by "
        f"__hash__() or __eq__(), potentially causing duplicate elements or loss of uniqueness. "
        f"Consider using immutable element types or an identity-preserving transformer for "
        f"set elements."
    )


def validate_set_element(
    before: Any,
    after: Any,
    fingerprint_before: int | None,
    path: str,
) -> None:
    """Confirm a transformed set element keeps the element's identity.

    Args:
        before: Copied element handed to the transformer.
        after: Element returned by the transformer.
        fingerprint_before: ``fingerprint(before)`` taken before the transform.
        path: Breadcrumb of the element.

    Raises:
        UnsafeMutationDetectedError: If a non-leaf element was mutated in place,
            or replaced by an element that does not compare equal to it.
    """
    if before is None or after is None or is_leaf_type(type(before)):
        return

    element_type = type(before)
    mutated = fingerprint_before is not None and _hash_or_none(before) != fingerprint_before
    if mutated:
        raise UnsafeMutationDetectedError(
            _unsafe_message(path, element_type, "mutated the element in place"),
            path,
            element_type,
        )
    if before is after:
        return
    if after != before or _hash_or_none(after) != fingerprint_before:
        raise UnsafeMutationDetectedError(
            _unsafe_message(path, element_type, "returned a different object"),
            path,
            element_type,
        )


def validate_no_collision(target: Collection[Any], element: Any, path: str, size: int) -> None:
    """Reject an element that would merge with one already in the copy.

    Args:
        target: Set being filled.
        element: Transformed element about to be inserted.
        path: Breadcrumb of the element.
        size: Number of elements in the source set.

    Raises:
        UnsafeMutationDetectedError: If ``element`` is unhashable or already present.
    """
    try:
        hash(element)
    except TypeError as exc:
        raise UnsafeMutationDetectedError(
            f"Set element transformation at path: {path} is potentially unsafe. "
            f"The transformer returned an unhashable {type_name(type(element))}, "
            f"which cannot be stored in a set.",
            path,
            type(element),
        ) from exc
    if element in target:
        raise UnsafeMutationDetectedError(
            f"Set element transformation at path: {path} is potentially unsafe. "
            f"The transformed value {element!r} collides with an element already in the copy, "
            f"which would silently shrink the set below its original {size} elements.",
            path,
            type(element),
        )
