"""All string enums for roombridge."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class RoomState(StrEnum):
    UNSTARTED = "unstarted"
    ACTIVE = "active"
    STOPPING = "stopping"
    STOPPED = "stopped"


@unique
class RemoteOperation(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"
    PATCH = "patch"


@unique
class HomeMsgType(StrEnum):
    TEXT = "m.text"
    EMOTE = "m.emote"
    NOTICE = "m.notice"


@unique
class PresenceStatus(StrEnum):
    IN = "in"
    OUT = "out"


@unique
class Side(StrEnum):
    """Which network a counter refers to."""

    REMOTE = "remote"
    HOME = "home"
    REMOTE_ECHO = "remote_echo"
