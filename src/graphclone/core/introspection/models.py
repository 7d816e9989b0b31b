"""Introspection models: field descriptors and the introspector protocol.

A `FieldIntrospector` is the only thing the composite copier knows about a
class: how to list its settable fields and how to build a fresh instance from
copied field values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Read-only description of a composite's named member.

    This is what the transformer receives as its first argument.

    Attributes:
        name: Attribute name on the owning instance.
        declared_type: Annotation for the member, or None if undeclared.
        owner: Class that exposes the member.
        readable: Whether the member has a read accessor.
        writable: Whether the member can be written on a new instance.
    """

    name: str
    declared_type: Any = None
    owner: type | None = None
    readable: bool = True
    writable: bool = True

    @property
    def participates(self) -> bool:
        """Only members with both accessors are copied."""
        return self.readable and self.writable


@dataclass(frozen=True, slots=True)
class CompositeLayout:
    """Members of one composite instance, split by how the copier treats them.

    Attributes:
        fields: Readable and writable members, copied in this order.
        read_only: Computed or frozen members that cannot be written back.
        indexers: Names of parameterized accessors (``__getitem__``).
    """

    fields: tuple[FieldDescriptor, ...] = ()
    read_only: tuple[FieldDescriptor, ...] = ()
    indexers: tuple[str, ...] = field(default_factory=tuple)


@runtime_checkable
class FieldIntrospector(Protocol):
    """Capability to enumerate and rebuild composites of some family of types.

    Built-in implementations:
    - DataclassIntrospector: ``@dataclass`` classes, rebuilt via ``__init__``
    - PydanticIntrospector: Pydantic models, rebuilt via ``model_construct``
    - AttributeIntrospector: any other object, rebuilt via ``__new__``
    """

    def supports(self, cls: type) -> bool:
        """Check if this introspector handles instances of ``cls``."""
        ...

    def describe(self, instance: Any) -> CompositeLayout:
        """List the members of ``instance``.

        Args:
            instance: Source composite (never modified).

        Returns:
            Layout of copyable, read-only and indexed members.
        """
        ...

    def read(self, instance: Any, descriptor: FieldDescriptor) -> Any:
        """Read one member's current value from the source instance."""
        ...

    def construct(self, cls: type, source: Any, values: dict[str, Any]) -> Any:
        """Build a new instance of ``cls`` holding ``values``.

        Args:
            cls: Runtime type of the source.
            source: Source instance, for metadata only (never modified).
            values: Copied and transformed value per field name.

        Returns:
            A new, independent instance.
        """
        ...
