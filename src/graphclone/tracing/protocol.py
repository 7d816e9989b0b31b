"""Protocols for advisory collection.

The copy engine is the sole producer of advisories; sinks only receive them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphclone.tracing.models import Advisory


@runtime_checkable
class AdvisorySink(Protocol):
    """Protocol for receiving copy advisories.

    Implementations forward advisories to an observability backend, a log,
    or an in-memory buffer.

    Built-in implementations:
        - InMemoryAdvisorySink: thread-safe buffer (tests, inspection)
        - LoggingAdvisorySink: one WARNING log record per advisory

    Usage:
        sink = InMemoryAdvisorySink()
        copy = deep_copy_and_apply(config, identity, sink=sink)
        for advisory in sink.of_kind(AdvisoryKind.TYPE_FIDELITY_LOSS):
            print(advisory.message)

    Thread Safety:
        A sink shared by concurrent copies must be thread-safe.
    """

    def emit(self, advisory: Advisory) -> None:
        """Receive one advisory.

        Args:
            advisory: The advisory to record.

        Note:
            Exceptions raised here are logged by the emitter and never reach
            the caller of the copy.
        """
        ...
