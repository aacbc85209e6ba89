"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Coroutine
from typing import Any

import pytest

from roombridge.core.bridge import Bridge
from roombridge.core.bridged_room import BridgedRoom
from roombridge.home.mock import MockNameMangler, MockSendIntent, MockUserMapper
from roombridge.models.enums import HomeMsgType, RemoteOperation, RoomState
from roombridge.models.message import (
    HomeMessage,
    HomeMessageContent,
    RemoteEvent,
    RemoteMessage,
    RemoteUser,
)
from roombridge.remote.mock import MockRemoteIdentityResolver, MockRemoteRoomClient
from roombridge.telemetry.mock import MockTelemetryProvider

ROOM_NAME = "gitterhq/sandbox"
BOT_REMOTE_ID = "bridge-bot"


@pytest.fixture
def advance() -> Callable[[int], Coroutine[Any, Any, None]]:
    """Yield control to let pending tasks run without real delay.

    Replaces ``await asyncio.sleep(0.05)`` patterns with zero-delay
    event loop yields::

        await advance()       # 5 yields (default)
        await advance(10)     # 10 yields for heavier workloads
    """

    async def _advance(n: int = 5) -> None:
        for _ in range(n):
            await asyncio.sleep(0)

    return _advance


@pytest.fixture
def telemetry() -> MockTelemetryProvider:
    return MockTelemetryProvider()


@pytest.fixture
def identity() -> MockRemoteIdentityResolver:
    return MockRemoteIdentityResolver(user_id=BOT_REMOTE_ID)


@pytest.fixture
def remote_client() -> MockRemoteRoomClient:
    return MockRemoteRoomClient()


@pytest.fixture
def ghost_intent() -> MockSendIntent:
    return MockSendIntent(user_id="@ghosts:home")


@pytest.fixture
def bot_intent() -> MockSendIntent:
    return MockSendIntent(user_id="@bridge:home")


@pytest.fixture
def user_mapper(ghost_intent: MockSendIntent) -> MockUserMapper:
    return MockUserMapper(intent=ghost_intent)


@pytest.fixture
def mangler() -> MockNameMangler:
    return MockNameMangler({"@carol:home": "carol"})


@pytest.fixture
def bridge(
    remote_client: MockRemoteRoomClient,
    identity: MockRemoteIdentityResolver,
    user_mapper: MockUserMapper,
    mangler: MockNameMangler,
    bot_intent: MockSendIntent,
    telemetry: MockTelemetryProvider,
) -> Bridge:
    return Bridge(
        remote_client=remote_client,
        identity_resolver=identity,
        user_mapper=user_mapper,
        name_mangler=mangler,
        bot_intent=bot_intent,
        telemetry=telemetry,
    )


@pytest.fixture
def room(bridge: Bridge) -> BridgedRoom:
    return BridgedRoom(bridge, ROOM_NAME)


@pytest.fixture
async def started_room(room: BridgedRoom) -> AsyncIterator[BridgedRoom]:
    """A room linked to ``!a:home`` that has joined the remote side."""
    room.link_home_room("!a:home")
    await room.start_and_join()
    yield room
    if room.state == RoomState.ACTIVE:
        await room.stop_and_leave()
    await room.wait_stopped()


def make_remote_message(
    text: str = "hello",
    *,
    user_id: str = "u1",
    username: str = "alice",
    html: str | None = None,
    status: bool = False,
    v: int = 1,
) -> RemoteMessage:
    return RemoteMessage(
        from_user=RemoteUser(id=user_id, username=username),
        text=text,
        html=html,
        status=status,
        v=v,
    )


def make_remote_event(
    text: str = "hello",
    operation: RemoteOperation | str = RemoteOperation.CREATE,
    **kwargs: Any,
) -> RemoteEvent:
    return RemoteEvent(operation=operation, model=make_remote_message(text, **kwargs))


def make_home_message(
    body: str = "hi",
    *,
    room_id: str = "!a:home",
    sender: str = "@carol:home",
    msgtype: HomeMsgType = HomeMsgType.TEXT,
) -> HomeMessage:
    return HomeMessage(
        room_id=room_id,
        sender=sender,
        content=HomeMessageContent(msgtype=msgtype, body=body),
    )
