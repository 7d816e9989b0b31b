"""Field introspectors and their registry.

Usage:
    registry = get_registry()
    introspector = registry.resolve(type(obj))
    layout = introspector.describe(obj)

    # Custom families of composites can be registered ahead of the built-ins:
    registry.register(MyORMIntrospector())
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any

from graphclone.core.introspection.models import (
    CompositeLayout,
    FieldDescriptor,
    FieldIntrospector,
)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic v2 model without importing pydantic.

    Models from the ``pydantic.v1`` compatibility layer lack ``model_fields``
    and are copied as plain objects.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    if not hasattr(cls, "model_fields"):
        return False
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _user_classes(cls: type) -> list[type]:
    """Classes in the MRO that belong to user code, nearest first."""
    return [
        klass
        for klass in cls.__mro__
        if klass is not object and not klass.__module__.startswith(("pydantic", "builtins"))
    ]


def _resolve_hints(cls: type) -> dict[str, Any]:
    """Resolve annotations, keeping raw strings if forward references fail."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError):
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _read_only_properties(cls: type, exclude: set[str]) -> tuple[FieldDescriptor, ...]:
    """Class-level properties without a setter."""
    seen: set[str] = set(exclude)
    found: list[FieldDescriptor] = []
    for klass in _user_classes(cls):
        for name, attr in vars(klass).items():
            if name in seen or (name.startswith("__") and name.endswith("__")):
                continue
            seen.add(name)
            if isinstance(attr, property) and attr.fset is None:
                return_type = getattr(attr.fget, "__annotations__", {}).get("return")
                found.append(
                    FieldDescriptor(
                        name=name,
                        declared_type=return_type,
                        owner=cls,
                        readable=attr.fget is not None,
                        writable=False,
                    )
                )
    return tuple(found)


def _indexers(cls: type) -> tuple[str, ...]:
    """Parameterized accessors declared by user classes."""
    for klass in _user_classes(cls):
        if "__getitem__" in vars(klass):
            return ("__getitem__",)
    return ()


def _slot_names(cls: type) -> list[str]:
    """All slot attribute names in the MRO, with private names mangled."""
    names: list[str] = []
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if slot.startswith("__") and not slot.endswith("__"):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            if slot not in names:
                names.append(slot)
    return names


def _assign_attributes(cls: type, values: dict[str, Any]) -> Any:
    """Build an instance without calling __init__ and write attributes directly."""
    instance = cls.__new__(cls)
    slots = set(_slot_names(cls))
    for name, value in values.items():
        if name in slots or not hasattr(instance, "__dict__"):
            object.__setattr__(instance, name, value)
        else:
            instance.__dict__[name] = value
    return instance


class DataclassIntrospector:
    """Dataclasses: fields from ``dataclasses.fields``, rebuilt through ``__init__``.

    ``init=False`` fields are assigned after construction on mutable
    dataclasses. On frozen dataclasses they cannot be written and are
    reported as read-only. Classes whose ``__init__`` does not accept their
    fields are rebuilt like plain objects.
    """

    def supports(self, cls: type) -> bool:
        return dataclasses.is_dataclass(cls) and isinstance(cls, type)

    def describe(self, instance: Any) -> CompositeLayout:
        cls = type(instance)
        hints = _resolve_hints(cls)
        frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]

        writable: list[FieldDescriptor] = []
        read_only: list[FieldDescriptor] = []
        for f in dataclasses.fields(instance):
            descriptor = FieldDescriptor(
                name=f.name,
                declared_type=hints.get(f.name, f.type),
                owner=cls,
                writable=f.init or not frozen,
            )
            (writable if descriptor.writable else read_only).append(descriptor)

        names = {d.name for d in writable} | {d.name for d in read_only}
        return CompositeLayout(
            fields=tuple(writable),
            read_only=tuple(read_only) + _read_only_properties(cls, names),
            indexers=_indexers(cls),
        )

    def read(self, instance: Any, descriptor: FieldDescriptor) -> Any:
        return getattr(instance, descriptor.name)

    def construct(self, cls: type, source: Any, values: dict[str, Any]) -> Any:
        if not cls.__dataclass_params__.init:  # type: ignore[attr-defined]
            return _assign_attributes(cls, values)
        init_names = {f.name for f in dataclasses.fields(cls) if f.init}
        try:
            instance = cls(**{name: value for name, value in values.items() if name in init_names})
        except TypeError:
            # __init__ was replaced with a signature that does not take the fields
            return _assign_attributes(cls, values)
        for name, value in values.items():
            if name not in init_names:
                setattr(instance, name, value)
        return instance


class PydanticIntrospector:
    """Pydantic models: declared and extra fields, rebuilt with ``model_construct``.

    ``model_construct`` skips validation, so transformed values are kept
    verbatim (a redacted ``"***"`` survives in an ``int`` field), and the
    source's ``model_fields_set`` is carried over.
    """

    def supports(self, cls: type) -> bool:
        return _is_pydantic(cls)

    def describe(self, instance: Any) -> CompositeLayout:
        cls = type(instance)
        fields = [
            FieldDescriptor(name=name, declared_type=info.annotation, owner=cls)
            for name, info in cls.model_fields.items()
        ]
        extra = instance.model_extra or {}
        fields.extend(FieldDescriptor(name=name, owner=cls) for name in extra)

        computed = tuple(
            FieldDescriptor(
                name=name,
                declared_type=info.return_type,
                owner=cls,
                writable=False,
            )
            for name, info in cls.model_computed_fields.items()
        )
        names = {d.name for d in fields} | {d.name for d in computed}
        return CompositeLayout(
            fields=tuple(fields),
            read_only=computed + _read_only_properties(cls, names),
            indexers=_indexers(cls),
        )

    def read(self, instance: Any, descriptor: FieldDescriptor) -> Any:
        extra = instance.model_extra or {}
        if descriptor.name in extra:
            return extra[descriptor.name]
        return getattr(instance, descriptor.name)

    def construct(self, cls: type, source: Any, values: dict[str, Any]) -> Any:
        return cls.model_construct(_fields_set=set(source.model_fields_set), **values)


class AttributeIntrospector:
    """Plain objects: instance ``__dict__`` and ``__slots__`` attributes.

    Rebuilt the way the standard copy protocol does it: ``cls.__new__(cls)``
    without calling ``__init__``, then direct attribute assignment.
    """

    def supports(self, cls: type) -> bool:
        return True

    def describe(self, instance: Any) -> CompositeLayout:
        cls = type(instance)
        hints = _resolve_hints(cls)
        names = list(vars(instance)) if hasattr(instance, "__dict__") else []
        for slot in _slot_names(cls):
            if slot not in names and hasattr(instance, slot):
                names.append(slot)

        fields = tuple(
            FieldDescriptor(name=name, declared_type=hints.get(name), owner=cls) for name in names
        )
        return CompositeLayout(
            fields=fields,
            read_only=_read_only_properties(cls, set(names)),
            indexers=_indexers(cls),
        )

    def read(self, instance: Any, descriptor: FieldDescriptor) -> Any:
        return getattr(instance, descriptor.name)

    def construct(self, cls: type, source: Any, values: dict[str, Any]) -> Any:
        return _assign_attributes(cls, values)


class IntrospectorRegistry:
    """Ordered list of introspectors; the first one supporting a type wins.

    The plain attribute introspector is always consulted last, so every type
    resolves to some introspector.
    """

    def __init__(self) -> None:
        """Initialize registry with the built-in introspectors."""
        self._introspectors: list[FieldIntrospector] = [
            DataclassIntrospector(),
            PydanticIntrospector(),
        ]
        self._fallback: FieldIntrospector = AttributeIntrospector()

    def register(self, introspector: FieldIntrospector) -> None:
        """Register an introspector ahead of all previously registered ones.

        Args:
            introspector: Introspector to consult first.

        Raises:
            TypeError: If the object does not implement FieldIntrospector.
        """
        if not isinstance(introspector, FieldIntrospector):
            raise TypeError(
                f"{type(introspector).__name__} does not implement FieldIntrospector protocol"
            )
        self._introspectors.insert(0, introspector)

    def resolve(self, cls: type) -> FieldIntrospector:
        """Find the introspector for a composite type.

        Args:
            cls: Runtime type of a composite value.

        Returns:
            First registered introspector supporting ``cls``, else the fallback.
        """
        for introspector in self._introspectors:
            if introspector.supports(cls):
                return introspector
        return self._fallback


# Module-level registry instance
_registry = IntrospectorRegistry()


def get_registry() -> IntrospectorRegistry:
    """Access the default introspector registry.

    Returns:
        The process-local IntrospectorRegistry instance.
    """
    return _registry
