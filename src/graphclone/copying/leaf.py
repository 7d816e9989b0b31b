"""Copiers for immutable leaves and optional wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphclone.core.shape.models import NodeKind
from graphclone.core.wrapper import Maybe

if TYPE_CHECKING:
    from graphclone.copying.context import CopyContext
    from graphclone.copying.walker import GraphWalker


def copy_leaf(walker: GraphWalker, value: Any, context: CopyContext) -> Any:
    """Return an immutable value unchanged; sharing it is safe.

    Args:
        walker: Dispatching walker (unused).
        value: Leaf value.
        context: Context of the node (unused).

    Returns:
        The value itself.
    """
    return value


def copy_optional(walker: GraphWalker, value: Maybe[Any], context: CopyContext) -> Maybe[Any]:
    """Copy and transform the inner value of a present ``Maybe``, then re-wrap.

    Args:
        walker: Dispatching walker for the inner value.
        value: Optional wrapper.
        context: Context of the wrapper; the inner value keeps its path and field.

    Returns:
        A new ``Maybe`` around the copied inner value, or the absent value as-is.
    """
    if not value.has_value:
        return value
    inner = walker.visit(value.unwrap(), context.wrapped(), NodeKind.OPTIONAL_VALUE)
    return Maybe(inner)
