"""Introspection: field descriptors and per-family field introspectors."""

from graphclone.core.introspection.core import (
    AttributeIntrospector,
    DataclassIntrospector,
    IntrospectorRegistry,
    PydanticIntrospector,
    get_registry,
)
from graphclone.core.introspection.models import (
    CompositeLayout,
    FieldDescriptor,
    FieldIntrospector,
)

__all__ = [
    # Models
    "FieldDescriptor",
    "CompositeLayout",
    "FieldIntrospector",
    # Core
    "DataclassIntrospector",
    "PydanticIntrospector",
    "AttributeIntrospector",
    "IntrospectorRegistry",
    "get_registry",
]
