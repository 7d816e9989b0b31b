"""Per-node copy context and the recursion depth guard."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from graphclone.config.settings import DEFAULT_MAX_DEPTH
from graphclone.core.errors import RecursionLimitExceededError
from graphclone.core.introspection.models import FieldDescriptor
from graphclone.core.path.models import PathTracker
from graphclone.core.types import Transformer
from graphclone.tracing.emitter import TelemetryEmitter


@dataclass(frozen=True, slots=True)
class DepthGuard:
    """Turns unbounded or cyclic recursion into a deterministic failure."""

    max_depth: int = DEFAULT_MAX_DEPTH

    def check(self, depth: int, path: PathTracker) -> None:
        """Reject a node at or beyond the ceiling.

        Raises:
            RecursionLimitExceededError: If ``depth >= max_depth``.
        """
        if depth >= self.max_depth:
            raise RecursionLimitExceededError(self.max_depth, str(path))


@dataclass(frozen=True, slots=True)
class CopyContext:
    """Everything a copier needs to know about the node it is visiting.

    Immutable: each step into a child derives a new context, so siblings never
    observe each other's path or depth.

    Attributes:
        transformer: Caller-supplied transform.
        emitter: Advisory emitter for this call.
        guard: Depth ceiling for this call.
        path: Breadcrumb of this node.
        depth: Number of steps from the root.
        field: Containing field, forwarded into collection elements.
        declared_type: Annotation of the slot holding this exact node, only
            set for a composite field's own value.
    """

    transformer: Transformer
    emitter: TelemetryEmitter
    guard: DepthGuard
    path: PathTracker = PathTracker()
    depth: int = 0
    field: FieldDescriptor | None = None
    declared_type: Any = None

    @property
    def field_name(self) -> str | None:
        return self.field.name if self.field is not None else None

    def member(self, descriptor: FieldDescriptor) -> CopyContext:
        """Context for a composite field's value."""
        return dataclasses.replace(
            self,
            path=self.path.field(descriptor.name),
            depth=self.depth + 1,
            field=descriptor,
            declared_type=descriptor.declared_type,
        )

    def element(self, path: PathTracker) -> CopyContext:
        """Context for a collection element; the containing field is forwarded."""
        return dataclasses.replace(self, path=path, depth=self.depth + 1, declared_type=None)

    def wrapped(self) -> CopyContext:
        """Context for the inner value of an optional wrapper."""
        return self.element(self.path)
