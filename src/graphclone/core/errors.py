"""Error taxonomy for deep copy failures.

Every error carries the breadcrumb path of the node being processed when the
copy was aborted. A failed copy never returns a partial result.
"""

from __future__ import annotations


class DeepCopyError(Exception):
    """Base class for all copy failures.

    Attributes:
        path: Breadcrumb of the node where the copy was aborted.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class NotSupportedKindError(DeepCopyError):
    """Raised for shapes the engine refuses to copy.

    Multi-dimensional arrays, mappings keyed by types outside the immutable
    allow-list, and one-shot iterators.
    """

    pass


class RecursionLimitExceededError(DeepCopyError):
    """Raised when the graph is nested deeper than the configured ceiling."""

    def __init__(self, max_depth: int, path: str) -> None:
        super().__init__(
            f"Maximum recursion depth of {max_depth} exceeded during deep copy at path: {path}. "
            f"Circular references are not supported.",
            path,
        )
        self.max_depth = max_depth


class TransformerFailureError(DeepCopyError):
    """Raised when the caller-supplied transformer raises.

    The original exception is available as ``__cause__``.

    Attributes:
        field_name: Name of the containing field, or None outside any field.
        node_kind: What was being transformed (e.g. "composite field").
    """

    def __init__(
        self,
        path: str,
        field_name: str | None,
        node_kind: str,
        value_type: type,
    ) -> None:
        super().__init__(
            f"Transformer function threw an exception while processing {node_kind} "
            f"at path: {path}. Field name: {field_name or '<none>'}, "
            f"Value type: {value_type.__qualname__}. See __cause__ for details.",
            path,
        )
        self.field_name = field_name
        self.node_kind = node_kind


class UnsafeMutationDetectedError(DeepCopyError):
    """Raised when a transformed set element could corrupt set uniqueness."""

    def __init__(self, message: str, path: str, element_type: type) -> None:
        super().__init__(message, path)
        self.element_type = element_type


class ArgumentError(DeepCopyError, TypeError):
    """Raised when a required argument or value is missing or of the wrong kind."""

    pass


class ConstructionFailureError(DeepCopyError):
    """Raised when a composite type cannot be rebuilt from its copied fields."""

    pass
