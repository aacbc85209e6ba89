"""Abstract base classes for the home chat network."""

from __future__ import annotations

from abc import ABC, abstractmethod

from roombridge.models.delivery import SendResult
from roombridge.models.message import HomeMessageContent, RemoteUser


class HomeSendIntent(ABC):
    """Something that can post messages into home rooms as one user."""

    @abstractmethod
    async def send_message(self, room_id: str, content: HomeMessageContent) -> SendResult:
        """Post *content* into *room_id*.

        Implementations may either raise or return an unsuccessful
        :class:`SendResult`; the relay treats both as a failed delivery.
        """
        ...


class BridgeUser(ABC):
    """Home-side ghost that presents one remote user."""

    @property
    @abstractmethod
    def user_id(self) -> str:
        """Home-network user ID of the ghost."""
        ...

    @abstractmethod
    async def update(self, remote_user: RemoteUser) -> None:
        """Sync display name and avatar from *remote_user*."""
        ...

    @abstractmethod
    async def set_room_presence(self, room_id: str, online: bool) -> None:
        """Mark the ghost as present in (or gone from) a remote room."""
        ...

    @abstractmethod
    def get_send_intent(self) -> HomeSendIntent:
        """Return an intent that sends as this ghost."""
        ...


class UserMapper(ABC):
    """Maps remote users to home-side ghosts."""

    @abstractmethod
    async def map_remote_user(self, remote_user: RemoteUser) -> BridgeUser:
        """Look up or create the ghost for *remote_user*."""
        ...

    @abstractmethod
    async def get_remote_user_by_id(self, user_id: str) -> BridgeUser | None:
        """Return the ghost for a remote user ID, or ``None`` if unknown."""
        ...


class NameMangler(ABC):
    """Turns a home user ID into a label that is unambiguous remotely."""

    @abstractmethod
    def mangle(self, user_id: str) -> str:
        """Return the display label for *user_id*."""
        ...


class LocalpartNameMangler(NameMangler):
    """Labels users by their localpart, keeping the server when it is foreign.

    ``@alice:example.org`` becomes ``alice`` when ``example.org`` is the
    home server, and ``alice:other.org`` for ``@alice:other.org``.
    """

    def __init__(self, home_server: str | None = None) -> None:
        self._home_server = home_server

    def mangle(self, user_id: str) -> str:
        localpart, sep, server = user_id.lstrip("@").partition(":")
        if not sep or server == self._home_server:
            return localpart
        return f"{localpart}:{server}"
