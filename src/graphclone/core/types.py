"""Core type definitions for graphclone."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graphclone.core.introspection.models import FieldDescriptor

type Copy[T] = T
"""Type alias indicating a value is an independent copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
state with its source. Mutating it never affects the original graph.
"""

type Transformer = Callable[[FieldDescriptor | None, Any], Any]
"""Signature: (containing_field, value) -> value_to_keep"""
