"""Advisory emission and the built-in sinks.

Usage:
    emitter = TelemetryEmitter(InMemoryAdvisorySink())
    emitter.type_fidelity_loss("root.ids", declared=Sequence, runtime=list)
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from graphclone.core.introspection.models import FieldDescriptor
from graphclone.core.shape.operations import type_name
from graphclone.tracing.models import Advisory, AdvisoryKind
from graphclone.tracing.protocol import AdvisorySink

logger = logging.getLogger(__name__)


class InMemoryAdvisorySink:
    """Thread-safe in-memory collector of advisories."""

    def __init__(self) -> None:
        self._advisories: list[Advisory] = []
        self._lock = threading.Lock()

    def emit(self, advisory: Advisory) -> None:
        with self._lock:
            self._advisories.append(advisory)

    @property
    def advisories(self) -> list[Advisory]:
        """Snapshot of everything collected so far, in emission order."""
        with self._lock:
            return list(self._advisories)

    def of_kind(self, kind: AdvisoryKind) -> list[Advisory]:
        """Collected advisories of one kind."""
        return [advisory for advisory in self.advisories if advisory.kind is kind]

    def clear(self) -> None:
        """Drop all collected advisories."""
        with self._lock:
            self._advisories.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._advisories)


class LoggingAdvisorySink:
    """Writes each advisory as a WARNING record.

    Args:
        target: Logger to write to. Defaults to this module's logger.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def emit(self, advisory: Advisory) -> None:
        self._logger.warning(
            "%s: %s",
            advisory.kind.value,
            advisory.message,
            extra={"advisory_tags": dict(advisory.tags)},
        )


class TelemetryEmitter:
    """Write-only front for an optional advisory sink.

    Emission is a side effect only: it never changes a copy and never raises.
    Without a sink every call is a no-op.

    Args:
        sink: Where advisories go, or None to drop them.
    """

    __slots__ = ("_sink",)

    def __init__(self, sink: AdvisorySink | None = None) -> None:
        self._sink = sink

    @property
    def enabled(self) -> bool:
        """Whether a sink is attached."""
        return self._sink is not None

    def emit(self, kind: AdvisoryKind, message: str, **tags: Any) -> None:
        """Emit one advisory.

        Args:
            kind: Advisory category.
            message: Self-contained human-readable description.
            **tags: Context tags; values are converted to strings, None dropped.
        """
        if self._sink is None:
            return
        rendered = {"type": kind.value, "severity": "warning"}
        rendered.update({key: str(value) for key, value in tags.items() if value is not None})
        advisory = Advisory(kind=kind, message=message, tags=rendered)
        try:
            self._sink.emit(advisory)
        except Exception:
            logger.warning("Advisory sink %r failed to record %s", self._sink, kind.value, exc_info=True)

    def type_fidelity_loss(
        self,
        path: str,
        declared: Any,
        runtime: Any,
        property_name: str | None = None,
    ) -> None:
        """Report a container copied as a different concrete type than declared."""
        if self._sink is None:
            return
        self.emit(
            AdvisoryKind.TYPE_FIDELITY_LOSS,
            f"Value at path: {path} has type {type_name(declared)} "
            f"but will be copied as {type_name(runtime)}",
            path=path,
            propertyName=property_name,
            declaredType=type_name(declared),
            runtimeType=type_name(runtime),
        )

    def comparer_fallback(
        self,
        path: str,
        source_type: type,
        element_type: type | None = None,
        key_type: type | None = None,
    ) -> None:
        """Report a set or mapping rebuilt with default hashing semantics."""
        if self._sink is None:
            return
        self.emit(
            AdvisoryKind.COMPARER_FALLBACK,
            f"{type_name(source_type)} could not be rebuilt at path: {path}, "
            f"using default equality semantics",
            path=path,
            sourceType=type_name(source_type),
            elementType=type_name(element_type) if element_type is not None else None,
            keyType=type_name(key_type) if key_type is not None else None,
        )

    def read_only_property_lost(self, path: str, descriptor: FieldDescriptor) -> None:
        """Report a member that cannot be written to the copy."""
        if self._sink is None:
            return
        self.emit(
            AdvisoryKind.READ_ONLY_PROPERTY_LOST,
            f"Read-only property '{descriptor.name}' at path: {path} cannot be set "
            f"on the copy",
            path=path,
            propertyName=descriptor.name,
            propertyType=type_name(descriptor.declared_type)
            if descriptor.declared_type is not None
            else None,
        )

    def indexed_property_skipped(self, path: str, owner: type, name: str) -> None:
        """Report a parameterized accessor that was not copied."""
        if self._sink is None:
            return
        self.emit(
            AdvisoryKind.INDEXED_PROPERTY_SKIPPED,
            f"Indexed property '{name}' of {type_name(owner)} cannot be copied at path: {path}",
            path=path,
            propertyName=name,
            ownerType=type_name(owner),
        )
