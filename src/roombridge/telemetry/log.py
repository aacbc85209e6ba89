"""Telemetry provider that writes counters and spans to a logger."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from roombridge.telemetry.base import BridgeSpan, TelemetryProvider

logger = logging.getLogger("roombridge.telemetry")


class LoggingTelemetryProvider(TelemetryProvider):
    """Logs each counter increment and finished span on ``roombridge.telemetry``.

    Counters go out at ``level``; failed spans are always logged as
    warnings. Handy while developing a bridge without a metrics backend::

        bridge = Bridge(..., telemetry=LoggingTelemetryProvider())
    """

    def __init__(self, level: int = logging.DEBUG) -> None:
        self._level = level

    def increment(self, counter: str, labels: Mapping[str, str] | None = None) -> None:
        logger.log(self._level, "%s +1 %s", counter, dict(labels or {}))

    def span_finished(self, span: BridgeSpan) -> None:
        elapsed_ms = (span.elapsed or 0.0) * 1000
        if span.ok:
            logger.log(
                self._level,
                "%s %s took %.1fms %s",
                span.kind,
                span.remote_room,
                elapsed_ms,
                span.attributes,
                extra={"remote_room": span.remote_room},
            )
        else:
            logger.warning(
                "%s %s failed after %.1fms: %s",
                span.kind,
                span.remote_room,
                elapsed_ms,
                span.error,
                extra={"remote_room": span.remote_room},
            )
