"""Data models for copy advisories.

An advisory is a non-fatal signal that the copy is not a perfect replica of
its source. Advisories never abort a copy and never change its result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class AdvisoryKind(StrEnum):
    """Category of a copy advisory, also emitted as the ``type`` tag."""

    TYPE_FIDELITY_LOSS = "TypeFidelityLoss"
    """Copied as a canonical container type instead of the original or declared one."""

    COMPARER_FALLBACK = "ComparerFallback"
    """A set/mapping subclass could not be rebuilt; default hashing semantics used."""

    READ_ONLY_PROPERTY_LOST = "ReadOnlyPropertyLost"
    """A computed or frozen member could not be written to the copy."""

    INDEXED_PROPERTY_SKIPPED = "IndexedPropertySkipped"
    """A parameterized accessor was not copied."""


@dataclass(frozen=True, slots=True)
class Advisory:
    """One advisory raised during a copy.

    Attributes:
        kind: Advisory category.
        message: Self-contained description, including the path.
        tags: Context such as ``path``, ``propertyName``, ``declaredType``.

    Example:
        Advisory(
            kind=AdvisoryKind.TYPE_FIDELITY_LOSS,
            message="Property 'ids' at path: root.ids has interface type Sequence ...",
            tags={"type": "TypeFidelityLoss", "path": "root.ids"},
        )
    """

    kind: AdvisoryKind
    message: str
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def path(self) -> str | None:
        """Path tag, if present."""
        return self.tags.get("path")

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "tags": dict(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Advisory:
        """Create from dictionary (for deserialization)."""
        return cls(
            kind=AdvisoryKind(data["kind"]),
            message=data["message"],
            tags=dict(data.get("tags", {})),
        )
