"""Advisory tracing: non-fatal signals about copy fidelity.

Usage:
    from graphclone.tracing import AdvisoryKind, InMemoryAdvisorySink

    sink = InMemoryAdvisorySink()
    deep_copy_and_apply(value, identity, sink=sink)
    lost = sink.of_kind(AdvisoryKind.READ_ONLY_PROPERTY_LOST)
"""

from graphclone.tracing.emitter import (
    InMemoryAdvisorySink,
    LoggingAdvisorySink,
    TelemetryEmitter,
)
from graphclone.tracing.models import Advisory, AdvisoryKind
from graphclone.tracing.protocol import AdvisorySink

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "AdvisorySink",
    "InMemoryAdvisorySink",
    "LoggingAdvisorySink",
    "TelemetryEmitter",
]
