"""Abstract base classes for the remote chat network."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable

from roombridge.models.message import PresenceEvent, RemoteEvent

PresenceHandler = Callable[[PresenceEvent], Awaitable[None]]


class RemoteIdentityResolver(ABC):
    """Finds out who the bridge itself is on the remote network."""

    @abstractmethod
    async def resolve_own_user_id(self) -> str:
        """Return the bridge's own remote user ID.

        Raises whatever the underlying client raises if the remote
        network is unreachable.
        """
        ...


class RemoteRoomHandle(ABC):
    """A joined remote room: live streams plus send capability."""

    @property
    @abstractmethod
    def room_id(self) -> str:
        """The remote network's identifier for the joined room."""
        ...

    @abstractmethod
    def messages(self) -> AsyncIterator[RemoteEvent]:
        """Iterate the room's live message stream.

        The iterator ends once :meth:`disconnect` has been called.
        """
        ...

    @abstractmethod
    async def subscribe_presence(self, handler: PresenceHandler) -> None:
        """Call *handler* for every presence change in the room."""
        ...

    @abstractmethod
    async def send(self, text: str) -> None:
        """Post a normal message."""
        ...

    @abstractmethod
    async def send_status(self, text: str) -> None:
        """Post a status (``/me``) message."""
        ...

    @abstractmethod
    async def remove_user(self, user_id: str) -> None:
        """Remove *user_id* from the room; used to leave it."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the message and presence streams."""
        ...


class RemoteRoomClient(ABC):
    """Joins rooms on the remote network."""

    @abstractmethod
    async def join(self, room_name: str) -> RemoteRoomHandle:
        """Join *room_name* and return a live handle to it."""
        ...

    async def close(self) -> None:  # noqa: B027
        """Release resources. Override in subclasses that hold connections."""
