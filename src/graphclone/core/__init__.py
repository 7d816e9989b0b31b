"""Core functionalities: stateless primitives shared by every copier.

Architecture Note:
    core/ contains pure, stateless building blocks: shape classification,
    paths, field introspection, the optional wrapper and the error taxonomy.
    The recursive traversal itself lives in copying/.
"""

from graphclone.core.errors import (
    ArgumentError,
    ConstructionFailureError,
    DeepCopyError,
    NotSupportedKindError,
    RecursionLimitExceededError,
    TransformerFailureError,
    UnsafeMutationDetectedError,
)
from graphclone.core.introspection import (
    AttributeIntrospector,
    CompositeLayout,
    DataclassIntrospector,
    FieldDescriptor,
    FieldIntrospector,
    IntrospectorRegistry,
    PydanticIntrospector,
    get_registry,
)
from graphclone.core.path import PathTracker
from graphclone.core.shape import NodeKind, Shape, classify
from graphclone.core.types import Copy, Transformer
from graphclone.core.wrapper import Maybe

__all__ = [
    # Types
    "Copy",
    "Transformer",
    "Maybe",
    # Errors
    "DeepCopyError",
    "NotSupportedKindError",
    "RecursionLimitExceededError",
    "TransformerFailureError",
    "UnsafeMutationDetectedError",
    "ArgumentError",
    "ConstructionFailureError",
    # Shape
    "Shape",
    "NodeKind",
    "classify",
    # Path
    "PathTracker",
    # Introspection
    "FieldDescriptor",
    "CompositeLayout",
    "FieldIntrospector",
    "DataclassIntrospector",
    "PydanticIntrospector",
    "AttributeIntrospector",
    "IntrospectorRegistry",
    "get_registry",
]
