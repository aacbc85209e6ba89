"""Telemetry providers for roombridge counters and spans."""

from roombridge.telemetry.base import Attr, BridgeSpan, SpanKind, TelemetryProvider
from roombridge.telemetry.log import LoggingTelemetryProvider
from roombridge.telemetry.mock import MockTelemetryProvider
from roombridge.telemetry.noop import NoopTelemetryProvider

__all__ = [
    "Attr",
    "BridgeSpan",
    "LoggingTelemetryProvider",
    "MockTelemetryProvider",
    "NoopTelemetryProvider",
    "SpanKind",
    "TelemetryProvider",
]
