"""Bridged room quickstart: mirror one remote room into two home rooms.

Uses the in-memory mocks so it runs without credentials. Shows:
- Starting a bridged room and linking home rooms plus a portal room
- Relaying remote messages, status messages and edits to every home room
- Relaying a home message to the remote room and echoing it to siblings
- Tearing down the remote side when the last link goes away

Run with:
    uv run python examples/quickstart.py
"""

from __future__ import annotations

import asyncio
import logging

from roombridge import (
    Bridge,
    BridgedRoom,
    HomeMessage,
    HomeMessageContent,
    LocalpartNameMangler,
    LoggingTelemetryProvider,
    RemoteEvent,
    RemoteMessage,
    RemoteUser,
)
from roombridge.home.mock import MockSendIntent, MockUserMapper
from roombridge.remote.mock import MockRemoteIdentityResolver, MockRemoteRoomClient


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    ghosts = MockSendIntent(user_id="@ghosts:example.org")
    bot = MockSendIntent(user_id="@bridge:example.org")
    remote = MockRemoteRoomClient()
    bridge = Bridge(
        remote_client=remote,
        identity_resolver=MockRemoteIdentityResolver("bridge-bot"),
        user_mapper=MockUserMapper(intent=ghosts),
        name_mangler=LocalpartNameMangler("example.org"),
        bot_intent=bot,
        telemetry=LoggingTelemetryProvider(logging.INFO),
    )

    room = BridgedRoom(bridge, "gitterhq/sandbox")
    room.link_home_room("!dev:example.org")
    room.link_home_room("!ops:example.org")
    await room.start_and_join()

    handle = remote.handles["gitterhq/sandbox"]
    alice = RemoteUser(id="u1", username="alice")
    first = RemoteMessage(from_user=alice, text="I like appels")
    edit = RemoteMessage(from_user=alice, text="I like apples", v=2)
    handle.push(RemoteEvent(operation="create", model=first))
    handle.push(RemoteEvent(operation="update", model=edit))
    handle.push(
        RemoteEvent(
            operation="create",
            model=RemoteMessage(from_user=alice, text="@alice waves", status=True),
        )
    )
    await asyncio.sleep(0.1)

    print("\n--- Home rooms received ---")
    for room_id, content in ghosts.sent:
        print(f"  [{room_id}] ({content.msgtype}) {content.body}")

    await room.on_outbound_home_message(
        HomeMessage(
            room_id="!dev:example.org",
            sender="@carol:example.org",
            content=HomeMessageContent(body="hi alice!"),
        )
    )
    print("\n--- Remote room received ---")
    for text in handle.sent:
        print(f"  {text}")
    print("\n--- Echoed to sibling rooms ---")
    for room_id, content in bot.sent:
        print(f"  [{room_id}] {content.body}")

    await room.unlink_home_room("!dev:example.org")
    await room.unlink_home_room("!ops:example.org")
    await room.wait_stopped()
    print(f"\nRoom state: {room.state}")


if __name__ == "__main__":
    asyncio.run(main())
