"""Counter and span hooks the bridge reports through."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class SpanKind(StrEnum):
    """Bridge operations that are timed as spans."""

    ROOM_START = "room.start"
    ROOM_STOP = "room.stop"
    RELAY_INBOUND = "relay.inbound"
    RELAY_OUTBOUND = "relay.outbound"


class Attr:
    """Label and span attribute keys."""

    # Counter labels
    SIDE = "side"
    METHOD = "method"

    # Span attributes
    SENDER = "sender"
    HOME_ROOM_ID = "home_room_id"
    RELAY_OPERATION = "relay.operation"
    RELAY_EDITED = "relay.edited"
    RELAY_TARGETS = "relay.targets"
    RELAY_DELIVERED = "relay.delivered"


@dataclass
class BridgeSpan:
    """One timed operation on a remote room.

    Code inside the span adds to :attr:`attributes` directly; the provider
    sees the span once it has finished.
    """

    kind: SpanKind
    remote_room: str
    attributes: dict[str, Any] = field(default_factory=dict)
    started_at: float = field(default_factory=time.monotonic)
    elapsed: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TelemetryProvider(ABC):
    """Receives the bridge's counters and finished spans.

    Both hooks are fire-and-forget: the bridge never reads anything back.
    """

    @abstractmethod
    def increment(self, counter: str, labels: Mapping[str, str] | None = None) -> None:
        """Add one to *counter* under *labels*."""
        ...

    @abstractmethod
    def span_finished(self, span: BridgeSpan) -> None:
        ...

    @contextmanager
    def span(
        self,
        kind: SpanKind,
        remote_room: str,
        attributes: Mapping[str, Any] | None = None,
    ) -> Iterator[BridgeSpan]:
        """Time the enclosed block; an exception marks the span failed and propagates."""
        span = BridgeSpan(kind=kind, remote_room=remote_room, attributes=dict(attributes or {}))
        try:
            yield span
        except Exception as exc:
            span.error = str(exc) or type(exc).__name__
            raise
        finally:
            span.elapsed = time.monotonic() - span.started_at
            self.span_finished(span)
