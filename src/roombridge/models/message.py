"""Remote and home message models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from roombridge.models.enums import HomeMsgType, RemoteOperation


class RemoteUser(BaseModel):
    """A participant of the remote network, as seen in message models."""

    id: str
    username: str
    display_name: str | None = None
    avatar_url: str | None = None


class RemoteMessage(BaseModel):
    """A chat message model delivered by the remote room stream.

    ``v`` is a monotonic version counter: ``1`` is a fresh message,
    anything above is an in-place edit of an earlier version.
    """

    id: str | None = None
    from_user: RemoteUser | None = None
    text: str = ""
    html: str | None = None
    status: bool = False
    v: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _default_html(self) -> RemoteMessage:
        if self.html is None:
            self.html = self.text
        return self

    @property
    def is_revision(self) -> bool:
        return self.v > 1


class RemoteEvent(BaseModel):
    """One event from the remote room's live message stream.

    ``operation`` stays a plain string so that operation kinds the bridge
    does not know about can still be parsed (and then ignored).
    """

    operation: RemoteOperation | str
    model: RemoteMessage | None = None

    @field_validator("operation", mode="before")
    @classmethod
    def _known_operation(cls, v: object) -> object:
        if isinstance(v, str) and not isinstance(v, RemoteOperation):
            try:
                return RemoteOperation(v)
            except ValueError:
                return v
        return v


class PresenceEvent(BaseModel):
    """One event from the remote room's presence stream."""

    user_id: str
    status: str


class HomeMessageContent(BaseModel):
    """Content of a home-network room message."""

    msgtype: HomeMsgType = HomeMsgType.TEXT
    body: str
    format: str | None = None
    formatted_body: str | None = None

    @property
    def is_emote(self) -> bool:
        return self.msgtype == HomeMsgType.EMOTE

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire dict, omitting absent rich-text keys."""
        return self.model_dump(mode="json", exclude_none=True)


class HomeMessage(BaseModel):
    """A message posted by a home-network user into a linked room."""

    room_id: str
    sender: str
    content: HomeMessageContent


class EditDiff(BaseModel):
    """Readable rendering of an in-place edit, in plain and rich text."""

    body: str
    formatted_body: str
