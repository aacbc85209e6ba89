"""In-memory remote network for testing."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from roombridge.models.message import PresenceEvent, RemoteEvent
from roombridge.remote.base import (
    PresenceHandler,
    RemoteIdentityResolver,
    RemoteRoomClient,
    RemoteRoomHandle,
)

_CLOSED = object()


class MockRemoteIdentityResolver(RemoteIdentityResolver):
    """Returns a fixed user ID, or raises ``error`` if one is set."""

    def __init__(self, user_id: str = "bridge-bot", error: Exception | None = None) -> None:
        self.user_id = user_id
        self.error = error
        self.calls = 0

    async def resolve_own_user_id(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.user_id


class MockRemoteRoomHandle(RemoteRoomHandle):
    """Queue-backed room handle that records everything sent to it.

    Tests push events with :meth:`push` / :meth:`push_presence`; the
    bridge consumes them through :meth:`messages`.
    """

    def __init__(self, room_id: str = "remote-room-1") -> None:
        self._room_id = room_id
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._presence_handlers: list[PresenceHandler] = []
        self.sent: list[str] = []
        self.statuses: list[str] = []
        self.removed_users: list[str] = []
        self.disconnect_count = 0
        self.send_error: Exception | None = None
        self.remove_error: Exception | None = None

    @property
    def room_id(self) -> str:
        return self._room_id

    @property
    def connected(self) -> bool:
        return self.disconnect_count == 0

    async def messages(self) -> AsyncIterator[RemoteEvent]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            assert isinstance(item, RemoteEvent)
            yield item

    async def subscribe_presence(self, handler: PresenceHandler) -> None:
        self._presence_handlers.append(handler)

    def push(self, event: RemoteEvent) -> None:
        """Deliver *event* on the message stream."""
        self._queue.put_nowait(event)

    async def push_presence(self, event: PresenceEvent) -> None:
        """Deliver *event* to every presence subscriber."""
        for handler in list(self._presence_handlers):
            await handler(event)

    async def send(self, text: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(text)

    async def send_status(self, text: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.statuses.append(text)

    async def remove_user(self, user_id: str) -> None:
        self.removed_users.append(user_id)
        if self.remove_error is not None:
            raise self.remove_error

    async def disconnect(self) -> None:
        self.disconnect_count += 1
        self._presence_handlers.clear()
        self._queue.put_nowait(_CLOSED)


class MockRemoteRoomClient(RemoteRoomClient):
    """Hands out :class:`MockRemoteRoomHandle` objects keyed by room name."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.joined: list[str] = []
        self.handles: dict[str, MockRemoteRoomHandle] = {}

    async def join(self, room_name: str) -> MockRemoteRoomHandle:
        self.joined.append(room_name)
        if self.error is not None:
            raise self.error
        handle = self.handles.get(room_name)
        if handle is None or not handle.connected:
            handle = MockRemoteRoomHandle(room_id=f"{room_name}-id")
            self.handles[room_name] = handle
        return handle
