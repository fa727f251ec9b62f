# Telemetry Package
from telemetry.source import TelemetrySource, InMemoryTelemetrySource
from telemetry.file_source import FileTelemetrySource
from telemetry.filters import filter_circuits, group_events_by_circuit
from telemetry.active_test import snapshot_from_test_result

__all__ = [
    "TelemetrySource",
    "InMemoryTelemetrySource",
    "FileTelemetrySource",
    "filter_circuits",
    "group_events_by_circuit",
    "snapshot_from_test_result",
]
