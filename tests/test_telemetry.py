"""Tests for the telemetry providers backing bridge counters."""

from __future__ import annotations

import logging

import pytest

from roombridge.core.bridge import Bridge
from roombridge.core.bridged_room import BridgedRoom
from roombridge.models.enums import Side
from roombridge.telemetry import (
    LoggingTelemetryProvider,
    MockTelemetryProvider,
    NoopTelemetryProvider,
    SpanKind,
)


class TestBridgeCounters:
    def test_inc_counter_records_side(
        self, bridge: Bridge, telemetry: MockTelemetryProvider
    ) -> None:
        bridge.inc_counter("sent_messages", Side.HOME)
        bridge.inc_counter("sent_messages", Side.HOME)
        bridge.inc_counter("sent_messages", Side.REMOTE)

        assert telemetry.count("sent_messages") == 3
        assert telemetry.count("sent_messages", side="home") == 2
        assert telemetry.increments[0] == ("sent_messages", {"side": "home"})

    def test_remote_call_counter(self, bridge: Bridge, telemetry: MockTelemetryProvider) -> None:
        bridge.inc_remote_call_counter("room.join")
        assert telemetry.increments == [("remote_api_calls", {"method": "room.join"})]

    def test_default_telemetry_is_noop(self, bridge: Bridge) -> None:
        bridge.telemetry = NoopTelemetryProvider()
        bridge.inc_counter("sent_messages", Side.HOME)
        with bridge.telemetry.span(SpanKind.RELAY_INBOUND, "room") as span:
            span.attributes["x"] = 1


class TestSpans:
    def test_failed_span_records_error_and_reraises(self) -> None:
        telemetry = MockTelemetryProvider()
        with pytest.raises(ValueError), telemetry.span(SpanKind.ROOM_START, "room"):
            raise ValueError("bad")

        (span,) = telemetry.spans
        assert not span.ok
        assert span.error == "bad"
        assert span.elapsed is not None

    def test_attributes_set_inside_span_are_kept(self) -> None:
        telemetry = MockTelemetryProvider()
        with telemetry.span(SpanKind.RELAY_OUTBOUND, "room", {"sender": "@a:home"}) as span:
            span.attributes["relay.targets"] = 2

        (finished,) = telemetry.get_spans(SpanKind.RELAY_OUTBOUND)
        assert finished.ok
        assert finished.remote_room == "room"
        assert finished.attributes == {"sender": "@a:home", "relay.targets": 2}

    async def test_room_lifecycle_spans(
        self, started_room: BridgedRoom, telemetry: MockTelemetryProvider
    ) -> None:
        await started_room.stop_and_leave()

        assert [s.kind for s in telemetry.spans] == [SpanKind.ROOM_START, SpanKind.ROOM_STOP]
        assert all(s.remote_room == started_room.remote_room_name for s in telemetry.spans)

    def test_reset(self) -> None:
        telemetry = MockTelemetryProvider()
        telemetry.increment("x")
        with telemetry.span(SpanKind.ROOM_STOP, "room"):
            pass
        telemetry.reset()
        assert telemetry.increments == []
        assert telemetry.spans == []


class TestLoggingTelemetry:
    def test_logs_counters(self, caplog: pytest.LogCaptureFixture) -> None:
        provider = LoggingTelemetryProvider(logging.INFO)
        with caplog.at_level(logging.INFO, logger="roombridge.telemetry"):
            provider.increment("sent_messages", {"side": "home"})
        assert "sent_messages +1 {'side': 'home'}" in caplog.text

    def test_counters_quiet_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        provider = LoggingTelemetryProvider()
        with caplog.at_level(logging.INFO, logger="roombridge.telemetry"):
            provider.increment("sent_messages")
        assert caplog.records == []

    def test_logs_finished_span(self, caplog: pytest.LogCaptureFixture) -> None:
        provider = LoggingTelemetryProvider(logging.INFO)
        with caplog.at_level(logging.INFO, logger="roombridge.telemetry"):
            with provider.span(SpanKind.RELAY_INBOUND, "gitterhq/sandbox"):
                pass
        assert "relay.inbound gitterhq/sandbox took" in caplog.text

    def test_failed_span_is_a_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        provider = LoggingTelemetryProvider()
        with caplog.at_level(logging.WARNING, logger="roombridge.telemetry"):
            with pytest.raises(ConnectionError):
                with provider.span(SpanKind.ROOM_START, "gitterhq/sandbox"):
                    raise ConnectionError("unreachable")
        (record,) = caplog.records
        assert record.levelno == logging.WARNING
        assert "room.start gitterhq/sandbox failed" in record.getMessage()
        assert "unreachable" in record.getMessage()
