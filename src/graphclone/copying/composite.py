"""Copier for composites: objects with named, readable and writable fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphclone.core.errors import ConstructionFailureError
from graphclone.core.shape.models import NodeKind
from graphclone.core.shape.operations import type_name

if TYPE_CHECKING:
    from graphclone.copying.context import CopyContext
    from graphclone.copying.walker import GraphWalker


def copy_composite(walker: GraphWalker, value: Any, context: CopyContext) -> Any:
    """Copy every readable and writable field into a new instance of the same type.

    Indexers and read-only members are skipped and reported as advisories.
    Each field value is visited with the field's own descriptor as context.

    Args:
        walker: Dispatching walker for field values.
        value: Composite source (never modified).
        context: Context of the composite.

    Returns:
        A new instance of ``type(value)``.

    Raises:
        ConstructionFailureError: If the type cannot be rebuilt from its fields.
    """
    cls = type(value)
    introspector = walker.registry.resolve(cls)
    layout = introspector.describe(value)
    path = str(context.path)

    for name in layout.indexers:
        context.emitter.indexed_property_skipped(path, cls, name)
    for descriptor in layout.read_only:
        context.emitter.read_only_property_lost(path, descriptor)

    values: dict[str, Any] = {}
    for descriptor in layout.fields:
        if not descriptor.participates:
            continue
        original = introspector.read(value, descriptor)
        values[descriptor.name] = walker.visit(original, context.member(descriptor), NodeKind.FIELD)

    try:
        return introspector.construct(cls, value, values)
    except Exception as exc:
        raise ConstructionFailureError(
            f"Type '{type_name(cls)}' at path: {path} could not be rebuilt from its copied "
            f"fields ({', '.join(values) or 'none'}): {exc}",
            path,
        ) from exc
