"""Recording telemetry provider for tests."""

from __future__ import annotations

from collections.abc import Mapping

from roombridge.telemetry.base import BridgeSpan, SpanKind, TelemetryProvider


class MockTelemetryProvider(TelemetryProvider):
    """Keeps every increment and finished span.

    Example::

        telemetry = MockTelemetryProvider()
        bridge = Bridge(..., telemetry=telemetry)
        # ... relay some messages ...
        assert telemetry.count("sent_messages", side="home") == 2
    """

    def __init__(self) -> None:
        self.increments: list[tuple[str, dict[str, str]]] = []
        self.spans: list[BridgeSpan] = []

    def increment(self, counter: str, labels: Mapping[str, str] | None = None) -> None:
        self.increments.append((counter, dict(labels or {})))

    def span_finished(self, span: BridgeSpan) -> None:
        self.spans.append(span)

    def count(self, counter: str, **labels: str) -> int:
        """How often *counter* was incremented with (at least) *labels*."""
        return sum(
            1
            for name, recorded in self.increments
            if name == counter and all(recorded.get(k) == v for k, v in labels.items())
        )

    def get_spans(self, kind: SpanKind) -> list[BridgeSpan]:
        return [s for s in self.spans if s.kind == kind]

    def reset(self) -> None:
        self.increments.clear()
        self.spans.clear()
