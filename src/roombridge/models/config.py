"""Bridge configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BridgeConfig(BaseModel):
    """Controls how relayed messages are rendered on the home network."""

    html_format: str = "org.matrix.custom.html"
    removed_color: str = "red"
    added_color: str = "green"
    edited_label: str = "(edited)"
    ellipsis: str = "..."

    # Seconds a stopped room's message stream may keep running before
    # its consumer task is cancelled.
    stop_grace: float = Field(default=5.0, ge=0)
