"""Graph walker: the entry point that classifies nodes and dispatches copiers.

Usage:
    def redact_password(field, value):
        if field is not None and field.name == "password":
            return "***"
        return value

    safe = deep_copy_and_apply(settings, redact_password)

    # Or keep a configured walker around (it holds no per-call state):
    walker = GraphWalker(redact_password, sink=InMemoryAdvisorySink())
    safe = walker.copy(settings)
"""

from __future__ import annotations

import logging
from typing import Any

from graphclone.config.settings import CopySettings
from graphclone.copying.context import CopyContext, DepthGuard
from graphclone.core.errors import (
    ArgumentError,
    DeepCopyError,
    NotSupportedKindError,
    TransformerFailureError,
)
from graphclone.core.introspection.core import IntrospectorRegistry, get_registry
from graphclone.core.shape.models import NodeKind, Shape
from graphclone.core.shape.operations import classify, is_one_shot_iterator, type_name
from graphclone.core.types import Copy, Transformer
from graphclone.tracing.emitter import LoggingAdvisorySink, TelemetryEmitter
from graphclone.tracing.protocol import AdvisorySink

logger = logging.getLogger(__name__)


class GraphWalker:
    """Deep copies arbitrary graphs, applying a transformer at every node.

    Every call builds its own root context, so one walker may be used from
    several threads at once.

    Args:
        transform: Called as ``transform(field, value)`` for every present
            node once its children are copied; its return value is kept.
        sink: Receiver for advisories. None drops them, unless
            ``settings.log_advisories`` routes them to the log.
        settings: Copy configuration. Defaults to environment-loaded settings.
        registry: Introspectors for composites. Defaults to the shared registry.

    Raises:
        ArgumentError: If ``transform`` is None or not callable.
    """

    def __init__(
        self,
        transform: Transformer,
        *,
        sink: AdvisorySink | None = None,
        settings: CopySettings | None = None,
        registry: IntrospectorRegistry | None = None,
    ) -> None:
        if transform is None:
            raise ArgumentError("A transform function is required; got None.", "root")
        if not callable(transform):
            raise ArgumentError(
                f"Transform must be callable; got {type_name(type(transform))}.", "root"
            )
        self._settings = settings if settings is not None else CopySettings()
        if sink is None and self._settings.log_advisories:
            sink = LoggingAdvisorySink()
        self._transform = transform
        self._emitter = TelemetryEmitter(sink)
        self._guard = DepthGuard(self._settings.max_depth)
        self._registry = registry if registry is not None else get_registry()

    @property
    def registry(self) -> IntrospectorRegistry:
        """Introspectors used for composites."""
        return self._registry

    @property
    def settings(self) -> CopySettings:
        return self._settings

    def copy(self, value: Any) -> Copy[Any]:
        """Deep copy ``value`` with the transform applied at every node.

        Args:
            value: Any value; None is returned as None.

        Returns:
            An independently owned copy.

        Raises:
            DeepCopyError: Any subclass; no partial result is ever returned.
        """
        if value is None:
            return None
        logger.debug("Deep copy started for %s", type_name(type(value)))
        context = CopyContext(
            transformer=self._transform,
            emitter=self._emitter,
            guard=self._guard,
        )
        try:
            result = self.visit(value, context, NodeKind.ROOT)
        except DeepCopyError as exc:
            logger.debug("Deep copy of %s failed at %s: %s", type_name(type(value)), exc.path, exc)
            raise
        logger.debug("Deep copy finished for %s", type_name(type(value)))
        return result

    def visit(self, value: Any, context: CopyContext, kind: NodeKind) -> Any:
        """Copy one node and its children, then transform the node.

        Args:
            value: Node to copy.
            context: Context of the node.
            kind: Where the node sits, used in failure messages.

        Returns:
            The copied and transformed node.
        """
        copied, shape = self.copy_node(value, context)
        if shape is None or not shape.transforms_self:
            return copied
        return self.apply(copied, context, kind)

    def copy_node(self, value: Any, context: CopyContext) -> tuple[Any, Shape | None]:
        """Copy one node and its children without transforming the node itself.

        Args:
            value: Node to copy.
            context: Context of the node.

        Returns:
            The copy and the node's shape; the shape is None for absent values.

        Raises:
            RecursionLimitExceededError: If the node is too deep.
            NotSupportedKindError: If the node is a one-shot iterator.
        """
        context.guard.check(context.depth, context.path)
        if value is None:
            return None, None

        shape = classify(value)
        if shape is Shape.COMPOSITE and is_one_shot_iterator(value):
            raise NotSupportedKindError(
                f"One-shot iterator of type '{type_name(type(value))}' is not supported at path: "
                f"{context.path}. Copying it would consume the source.",
                str(context.path),
            )
        return shape.get_copier()(self, value, context), shape

    def apply(self, value: Any, context: CopyContext, kind: NodeKind) -> Any:
        """Offer a copied node to the transformer.

        Absent values pass through untouched.

        Raises:
            TransformerFailureError: If the transformer raises; the original
                exception is chained as ``__cause__``.
        """
        if value is None:
            return None
        try:
            return context.transformer(context.field, value)
        except Exception as exc:
            raise TransformerFailureError(
                str(context.path), context.field_name, kind, type(value)
            ) from exc


def deep_copy_and_apply(
    value: Any,
    transform: Transformer,
    *,
    sink: AdvisorySink | None = None,
    settings: CopySettings | None = None,
    registry: IntrospectorRegistry | None = None,
) -> Copy[Any]:
    """Deep copy ``value``, applying ``transform`` at every node.

    Useful for redacting secrets or encrypting selected fields in a snapshot
    of configuration state without touching the live objects.

    Args:
        value: Any value; None is returned as None.
        transform: ``transform(field, value) -> value``. ``field`` is the
            containing field's descriptor, forwarded into collection
            elements, and None at the root or inside root-level collections.
            Mapping keys are never transformed.
        sink: Receiver for advisories, or None.
        settings: Copy configuration, or None for the defaults.
        registry: Introspectors for composites, or None for the shared registry.

    Returns:
        An independently owned copy with ``transform`` applied.

    Raises:
        ArgumentError: If ``transform`` is None or not callable.
        NotSupportedKindError: Multi-dimensional arrays, disallowed mapping keys,
            one-shot iterators.
        RecursionLimitExceededError: If the graph is deeper than ``max_depth``
            (including any cyclic graph).
        TransformerFailureError: If ``transform`` raises.
        UnsafeMutationDetectedError: If a transform would corrupt a set.
        ConstructionFailureError: If a composite cannot be rebuilt.

    Example:
        >>> deep_copy_and_apply({"a": [1, 2]}, lambda field, value: value)
        {'a': [1, 2]}
    """
    return GraphWalker(transform, sink=sink, settings=settings, registry=registry).copy(value)
