"""Send and delivery result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SendResult(BaseModel):
    """Result from a home-side send attempt."""

    success: bool
    event_id: str | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DeliveryResult(BaseModel):
    """Result of delivering one relayed message to one home room."""

    room_id: str
    success: bool
    event_id: str | None = None
    error: str | None = None
