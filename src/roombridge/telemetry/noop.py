"""Default telemetry provider: drops everything."""

from __future__ import annotations

from collections.abc import Mapping

from roombridge.telemetry.base import BridgeSpan, TelemetryProvider


class NoopTelemetryProvider(TelemetryProvider):
    def increment(self, counter: str, labels: Mapping[str, str] | None = None) -> None:
        pass

    def span_finished(self, span: BridgeSpan) -> None:
        pass
