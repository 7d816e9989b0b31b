"""Shape models: structural classification tags and type allow-lists.

Every value entering the walker is tagged with exactly one `Shape`, and each
shape owns one copier. The copier table lives behind `Shape.get_copier()` so
dispatch stays a closed, table-driven set rather than type-by-type branching.
"""

from __future__ import annotations

import array
import datetime
import types
import weakref
from collections.abc import Callable, Collection, Iterable, Mapping, MutableMapping
from collections.abc import MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from decimal import Decimal
from enum import Enum, StrEnum, auto
from fractions import Fraction
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from graphclone.copying.context import CopyContext
    from graphclone.copying.walker import GraphWalker

    Copier = Callable[[GraphWalker, Any, CopyContext], Any]


class Shape(Enum):
    """Structural shape of a value during traversal."""

    LEAF = auto()  # Immutable, returned as-is
    OPTIONAL_WRAPPER = auto()  # Maybe[T], inner value copied and re-wrapped
    ARRAY = auto()  # Fixed-size single-dimension sequence
    ORDERED_LIST = auto()  # Insertion-ordered growable sequence
    UNIQUE_SET = auto()  # No-duplicate container
    KEY_VALUE_MAP = auto()  # Key -> value container
    COMPOSITE = auto()  # Object with named fields

    def get_copier(self) -> Copier:
        """Get the copier function for this shape.

        Returns:
            Function ``(walker, value, context) -> copy`` for this shape.
        """
        # Late import to avoid circular dependency
        from graphclone.copying import composite, containers, leaf

        copiers = {
            Shape.LEAF: leaf.copy_leaf,
            Shape.OPTIONAL_WRAPPER: leaf.copy_optional,
            Shape.ARRAY: containers.copy_array,
            Shape.ORDERED_LIST: containers.copy_ordered_list,
            Shape.UNIQUE_SET: containers.copy_unique_set,
            Shape.KEY_VALUE_MAP: containers.copy_key_value_map,
            Shape.COMPOSITE: composite.copy_composite,
        }
        return copiers[self]

    @property
    def transforms_self(self) -> bool:
        """Whether the walker transforms the node itself after copying it.

        An optional wrapper transforms its inner value instead, so the wrapped
        value is offered to the transformer exactly once.
        """
        return self is not Shape.OPTIONAL_WRAPPER


class NodeKind(StrEnum):
    """Where a node sits relative to its parent, used in failure messages."""

    ROOT = "root value"
    FIELD = "composite field"
    ARRAY_ELEMENT = "array element"
    LIST_ELEMENT = "list element"
    SET_ELEMENT = "set element"
    MAP_VALUE = "map value"
    OPTIONAL_VALUE = "optional value"


# Values treated as immutable. Functions, classes, modules and the other
# reference-only objects are shared exactly like copy.deepcopy shares them.
LEAF_TYPES: tuple[type, ...] = (
    types.NoneType,
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    UUID,
    range,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.CodeType,
    types.EllipsisType,
    types.NotImplementedType,
    property,
    weakref.ref,
)

# Key types whose hash and equality can never change after insertion.
ALLOWED_KEY_TYPES: tuple[type, ...] = (
    str,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    UUID,
    Enum,
)

ARRAY_TYPES: tuple[type, ...] = (tuple, array.array, bytearray, memoryview)

ABSTRACT_SEQUENCE_TYPES: tuple[type, ...] = (Sequence, MutableSequence, Collection, Iterable)
ABSTRACT_SET_TYPES: tuple[type, ...] = (AbstractSet, MutableSet)
ABSTRACT_MAPPING_TYPES: tuple[type, ...] = (Mapping, MutableMapping)
