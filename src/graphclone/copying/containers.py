"""Copiers for arrays, ordered lists, unique sets and key-value maps.

Each copier builds a fresh container, visits every element through the
walker, and rebuilds the source's own container type where it can. When it
cannot, the copy is materialized as the canonical built-in container
(``list``, ``set``, ``dict``) and an advisory is emitted.
"""

from __future__ import annotations

import array
from collections import OrderedDict, defaultdict, deque
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet
from typing import TYPE_CHECKING, Any

from graphclone.copying import safety
from graphclone.core.errors import ArgumentError, NotSupportedKindError
from graphclone.core.shape.models import ALLOWED_KEY_TYPES, NodeKind, Shape
from graphclone.core.shape.operations import abstract_capability, is_allowed_key, type_name

if TYPE_CHECKING:
    from graphclone.copying.context import CopyContext
    from graphclone.copying.walker import GraphWalker


def _report_abstract_declaration(context: CopyContext, shape: Shape, value: Any) -> None:
    """Emit TypeFidelityLoss when the slot only declared an abstract capability."""
    if abstract_capability(context.declared_type, shape) is None:
        return
    context.emitter.type_fidelity_loss(
        str(context.path),
        declared=context.declared_type,
        runtime=type(value),
        property_name=context.field_name,
    )


# Arrays


def _fill_typed(target: Any, items: list[Any], typecode: str, context: CopyContext) -> Any:
    """Append copied elements to a typed array, rejecting values it cannot hold."""
    for position, item in enumerate(items):
        item_path = str(context.path.index(position))
        if item is None:
            raise ArgumentError(
                f"Array element at path: {item_path} is None, but array typecode "
                f"'{typecode}' requires a concrete value.",
                item_path,
            )
        try:
            target.append(item)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ArgumentError(
                f"Array element at path: {item_path} of type {type_name(type(item))} "
                f"does not fit array typecode '{typecode}': {exc}",
                item_path,
            ) from exc
    return target


def _rebuild_tuple(value: tuple[Any, ...], items: list[Any], context: CopyContext) -> Any:
    cls = type(value)
    if cls is tuple:
        return tuple(items)
    if hasattr(cls, "_make"):
        return cls._make(items)
    try:
        return cls(items)
    except TypeError:
        context.emitter.type_fidelity_loss(str(context.path), declared=cls, runtime=tuple)
        return tuple(items)


def copy_array(walker: GraphWalker, value: Any, context: CopyContext) -> Any:
    """Copy a fixed-size, single-dimension array element by element.

    Args:
        walker: Dispatching walker for elements.
        value: ``tuple``, ``array.array``, ``bytearray`` or ``memoryview``.
        context: Context of the array.

    Returns:
        A new array of the same kind and element count.

    Raises:
        NotSupportedKindError: For multi-dimensional (or zero-dimensional) views.
        ArgumentError: If a transformed element does not fit a typed array.
    """
    if isinstance(value, memoryview):
        if value.ndim != 1:
            raise NotSupportedKindError(
                f"Multi-dimensional arrays are not supported at path: {context.path}. "
                f"Array has rank {value.ndim}.",
                str(context.path),
            )
        if value.format not in array.typecodes:
            raise NotSupportedKindError(
                f"Array element format '{value.format}' is not supported at path: {context.path}.",
                str(context.path),
            )
        source: Any = value.tolist()
    else:
        source = value

    items = [
        walker.visit(item, context.element(context.path.index(position)), NodeKind.ARRAY_ELEMENT)
        for position, item in enumerate(source)
    ]

    if isinstance(value, memoryview):
        return memoryview(_fill_typed(array.array(value.format), items, value.format, context))
    if isinstance(value, array.array):
        return _fill_typed(array.array(value.typecode), items, value.typecode, context)
    if isinstance(value, bytearray):
        return _fill_typed(bytearray(), items, "B", context)
    return _rebuild_tuple(value, items, context)


# Ordered lists


def _new_sequence(value: Any) -> Any | None:
    """Empty container of the source's own type, or None if it cannot be built."""
    cls = type(value)
    if cls is list:
        return []
    if cls is deque:
        return deque(maxlen=value.maxlen)
    if isinstance(value, MutableSequence):
        try:
            return cls()
        except TypeError:
            return None
    return None


def copy_ordered_list(walker: GraphWalker, value: Any, context: CopyContext) -> Any:
    """Copy an ordered list, keeping element order.

    Args:
        walker: Dispatching walker for elements.
        value: Any non-string sequence or sized collection.
        context: Context of the list.

    Returns:
        A new container of the source type, or a ``list`` if the source type
        cannot be rebuilt.
    """
    _report_abstract_declaration(context, Shape.ORDERED_LIST, value)
    target = _new_sequence(value)
    if target is None:
        context.emitter.type_fidelity_loss(str(context.path), declared=type(value), runtime=list)
        target = []

    for position, item in enumerate(value):
        target.append(
            walker.visit(item, context.element(context.path.index(position)), NodeKind.LIST_ELEMENT)
        )
    return target


# Unique sets


def _new_set(value: Any, context: CopyContext) -> Any:
    """Empty mutable set to fill: the source's own type when it can be built."""
    cls = type(value)
    if cls is set or cls is frozenset:
        return set()
    if isinstance(value, MutableSet):
        try:
            return cls()
        except TypeError:
            pass
    if isinstance(value, frozenset):
        # Rebuilt from the filled staging set in _finish_set.
        return set()
    if isinstance(value, set):
        context.emitter.comparer_fallback(str(context.path), source_type=cls)
    else:
        context.emitter.type_fidelity_loss(str(context.path), declared=cls, runtime=set)
    return set()


def _finish_set(value: Any, target: Any, context: CopyContext) -> Any:
    cls = type(value)
    if cls is frozenset:
        return frozenset(target)
    if isinstance(value, frozenset):
        try:
            return cls(target)
        except TypeError:
            context.emitter.comparer_fallback(str(context.path), source_type=cls)
            return frozenset(target)
    return target


def copy_unique_set(walker: GraphWalker, value: Any, context: CopyContext) -> Any:
    """Copy a unique-element set, guarding its uniqueness invariant.

    Elements are visited in enumeration order; the position counter is used
    for paths only.

    Args:
        walker: Dispatching walker for elements.
        value: ``set``, ``frozenset`` or any other ``collections.abc.Set``.
        context: Context of the set.

    Returns:
        A new set with the same number of elements.

    Raises:
        UnsafeMutationDetectedError: If a transform mutates or replaces a
            non-leaf element, or makes two elements collide.
    """
    _report_abstract_declaration(context, Shape.UNIQUE_SET, value)
    target = _new_set(value, context)
    size = len(value)

    for position, item in enumerate(value):
        element_context = context.element(context.path.index(position))
        element_path = str(element_context.path)
        copied, shape = walker.copy_node(item, element_context)

        before = safety.fingerprint(copied)
        if shape is not None and shape.transforms_self:
            transformed = walker.apply(copied, element_context, NodeKind.SET_ELEMENT)
        else:
            transformed = copied
        safety.validate_set_element(copied, transformed, before, element_path)
        safety.validate_no_collision(target, transformed, element_path, size)
        target.add(transformed)

    return _finish_set(value, target, context)


# Key-value maps


def _validate_keys(value: Mapping[Any, Any], context: CopyContext) -> None:
    for key in value:
        if not is_allowed_key(key):
            allowed = ", ".join(cls.__name__ for cls in ALLOWED_KEY_TYPES)
            raise NotSupportedKindError(
                f"Mapping key type '{type_name(type(key))}' is not supported at path: "
                f"{context.path}. Only immutable types ({allowed}) are allowed as mapping keys "
                f"to ensure correct equality semantics after deep copy.",
                str(context.path),
            )


def _new_mapping(value: Mapping[Any, Any], context: CopyContext) -> Any:
    """Empty mapping to fill: the source's own type when it can be built."""
    cls = type(value)
    if cls is dict:
        return {}
    if cls is OrderedDict:
        return OrderedDict()
    if isinstance(value, defaultdict):
        try:
            return cls(value.default_factory)
        except TypeError:
            pass
    elif isinstance(value, MutableMapping):
        try:
            return cls()
        except TypeError:
            pass
    if isinstance(value, dict):
        context.emitter.comparer_fallback(
            str(context.path),
            source_type=cls,
            key_type=type(next(iter(value))) if value else None,
        )
    else:
        context.emitter.type_fidelity_loss(str(context.path), declared=cls, runtime=dict)
    return {}


def copy_key_value_map(walker: GraphWalker, value: Mapping[Any, Any], context: CopyContext) -> Any:
    """Copy a mapping; values are copied and transformed, keys are kept as-is.

    All keys are validated before any value is visited.

    Args:
        walker: Dispatching walker for values.
        value: ``dict``, ``OrderedDict``, ``defaultdict`` or any other ``Mapping``.
        context: Context of the mapping.

    Returns:
        A new mapping with the same keys.

    Raises:
        NotSupportedKindError: If any key is outside the immutable allow-list.
    """
    _validate_keys(value, context)
    _report_abstract_declaration(context, Shape.KEY_VALUE_MAP, value)
    target = _new_mapping(value, context)

    for key, item in value.items():
        target[key] = walker.visit(item, context.element(context.path.key(key)), NodeKind.MAP_VALUE)
    return target
