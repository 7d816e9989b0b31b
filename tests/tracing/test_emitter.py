"""Tests for the telemetry emitter and built-in sinks.

Why these tests exist:
- Emission must never affect a copy, even when a sink fails
- Tags are the machine-readable contract for advisory consumers
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from graphclone.core.introspection import FieldDescriptor
from graphclone.tracing import (
    AdvisoryKind,
    AdvisorySink,
    InMemoryAdvisorySink,
    LoggingAdvisorySink,
    TelemetryEmitter,
)


class ExplodingSink:
    def emit(self, advisory):
        raise RuntimeError("disk full")


def test_sinks_implement_protocol():
    assert isinstance(InMemoryAdvisorySink(), AdvisorySink)
    assert isinstance(LoggingAdvisorySink(), AdvisorySink)


def test_no_sink_is_noop():
    emitter = TelemetryEmitter()
    assert not emitter.enabled
    emitter.type_fidelity_loss("root", declared=Sequence, runtime=list)


def test_type_fidelity_loss_tags(sink):
    TelemetryEmitter(sink).type_fidelity_loss(
        "root.Items", declared=Sequence, runtime=list, property_name="Items"
    )
    (advisory,) = sink.advisories
    assert advisory.kind is AdvisoryKind.TYPE_FIDELITY_LOSS
    assert advisory.tags == {
        "type": "TypeFidelityLoss",
        "severity": "warning",
        "path": "root.Items",
        "propertyName": "Items",
        "declaredType": "collections.abc.Sequence",
        "runtimeType": "list",
    }
    assert "root.Items" in advisory.message


def test_none_tags_are_dropped(sink):
    TelemetryEmitter(sink).comparer_fallback("root", source_type=set)
    (advisory,) = sink.advisories
    assert "elementType" not in advisory.tags
    assert "keyType" not in advisory.tags
    assert advisory.tags["sourceType"] == "set"


def test_read_only_and_indexer_advisories(sink):
    emitter = TelemetryEmitter(sink)
    emitter.read_only_property_lost("root", FieldDescriptor("total", declared_type=int))
    emitter.indexed_property_skipped("root", dict, "__getitem__")

    lost = sink.of_kind(AdvisoryKind.READ_ONLY_PROPERTY_LOST)
    skipped = sink.of_kind(AdvisoryKind.INDEXED_PROPERTY_SKIPPED)
    assert lost[0].tags["propertyName"] == "total"
    assert lost[0].tags["propertyType"] == "int"
    assert skipped[0].tags["ownerType"] == "dict"


def test_failing_sink_is_logged_not_raised(caplog):
    emitter = TelemetryEmitter(ExplodingSink())
    with caplog.at_level(logging.WARNING, logger="graphclone.tracing.emitter"):
        emitter.type_fidelity_loss("root", declared=Sequence, runtime=list)
    assert "failed to record TypeFidelityLoss" in caplog.text


def test_logging_sink_writes_warning(caplog):
    target = logging.getLogger("test.advisories")
    emitter = TelemetryEmitter(LoggingAdvisorySink(target))
    with caplog.at_level(logging.WARNING, logger="test.advisories"):
        emitter.comparer_fallback("root.Tags", source_type=set)
    (record,) = caplog.records
    assert record.levelno == logging.WARNING
    assert record.getMessage().startswith("ComparerFallback: ")
    assert record.advisory_tags["path"] == "root.Tags"


def test_in_memory_sink_is_thread_safe(sink):
    emitter = TelemetryEmitter(sink)

    def emit_many(_):
        for _ in range(100):
            emitter.comparer_fallback("root", source_type=set)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(emit_many, range(8)))

    assert len(sink) == 800
    sink.clear()
    assert len(sink) == 0
