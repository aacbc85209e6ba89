"""BridgedRoom: one remote room and the home rooms linked to it."""

from __future__ import annotations

import asyncio
import logging

from roombridge.core.bridge import Bridge, RoomStateError
from roombridge.core.edit_diff import EditCache
from roombridge.core.relay import MessageRelay
from roombridge.models.delivery import DeliveryResult
from roombridge.models.enums import PresenceStatus, RoomState
from roombridge.models.message import HomeMessage, PresenceEvent, RemoteEvent
from roombridge.remote.base import RemoteRoomHandle
from roombridge.telemetry.base import SpanKind

logger = logging.getLogger("roombridge.room")


class BridgedRoom:
    """A remote-network room mirrored into one or more home-network rooms.

    Lifecycle: ``UNSTARTED -> ACTIVE -> STOPPING -> STOPPED``; a stopped
    room is never restarted, build a new one instead. Removing the last
    link (with no portal room set) stops the room and leaves it on the
    remote side, since nothing is listening any more.

    Each room consumes its remote message stream in a single task, so
    events are relayed strictly in arrival order and the per-sender edit
    cache is never touched concurrently.
    """

    def __init__(self, bridge: Bridge, remote_room_name: str) -> None:
        self._bridge = bridge
        self._remote_room_name = remote_room_name
        self._linked_home_room_ids: list[str] = []
        self._portal_room_id: str | None = None
        self._state = RoomState.UNSTARTED

        # Set by start_and_join
        self._own_remote_user_id: str | None = None
        self._handle: RemoteRoomHandle | None = None
        self._consumer: asyncio.Task[None] | None = None

        self._edit_cache = EditCache()
        self._relay = MessageRelay(self, bridge, self._edit_cache)
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"BridgedRoom({self._remote_room_name!r}, state={self._state})"

    # -- Accessors --

    @property
    def remote_room_name(self) -> str:
        return self._remote_room_name

    @property
    def state(self) -> RoomState:
        return self._state

    @property
    def own_remote_user_id(self) -> str | None:
        return self._own_remote_user_id

    @property
    def remote_room_handle(self) -> RemoteRoomHandle | None:
        return self._handle

    @property
    def edit_cache(self) -> EditCache:
        return self._edit_cache

    @property
    def relay(self) -> MessageRelay:
        return self._relay

    # -- Links --

    def link_home_room(self, room_id: str) -> None:
        """Append *room_id* to the linked home rooms.

        Duplicates are not filtered; the link table above this room
        decides which links exist.
        """
        if self._state == RoomState.STOPPED:
            raise RoomStateError(f"Cannot link {room_id}: {self._remote_room_name} is stopped")
        self._linked_home_room_ids.append(room_id)

    async def unlink_home_room(self, room_id: str) -> None:
        """Remove *room_id* from the linked home rooms.

        When no link and no portal room remain, the room is stopped and
        left on the remote side before this returns.
        """
        async with self._lock:
            self._linked_home_room_ids = [
                rid for rid in self._linked_home_room_ids if rid != room_id
            ]
            if self._linked_home_room_ids or self._portal_room_id:
                # still needed
                return

            if self._state == RoomState.UNSTARTED:
                # never joined, so there is nothing to leave
                self._state = RoomState.STOPPED
                return
            await self._stop_and_leave()

    def get_linked_home_room_ids(self) -> list[str]:
        return list(self._linked_home_room_ids)

    def set_portal_room(self, room_id: str | None) -> None:
        """Set (or clear, with ``None``) the portal room.

        Replacing one portal room with another is allowed but logged,
        because the old portal silently stops receiving traffic.
        """
        if self._portal_room_id is not None and room_id not in (None, self._portal_room_id):
            logger.warning(
                "Replacing portal room %s with %s for %s",
                self._portal_room_id,
                room_id,
                self._remote_room_name,
                extra={"remote_room": self._remote_room_name},
            )
        self._portal_room_id = room_id

    def get_portal_room(self) -> str | None:
        return self._portal_room_id

    def all_linked_room_ids(self) -> list[str]:
        """Every home room that should see traffic: links first, portal last."""
        room_ids = list(self._linked_home_room_ids)
        if self._portal_room_id:
            room_ids.append(self._portal_room_id)
        return room_ids

    # -- Lifecycle --

    async def start_and_join(self) -> None:
        """Join the remote room and start relaying its messages.

        Any failure (resolving the bridge's own identity, joining,
        subscribing) propagates and leaves the room UNSTARTED so the
        caller may retry. Unlinks arriving while the join is in flight
        wait for it, so a room emptied meanwhile is left right after.
        """
        async with self._lock:
            if self._state != RoomState.UNSTARTED:
                raise RoomStateError(
                    f"Cannot start {self._remote_room_name} in state {self._state}"
                )

            bridge = self._bridge
            with bridge.telemetry.span(SpanKind.ROOM_START, self._remote_room_name):
                # Needed to recognise reflections of messages the bridge sent
                own_user_id = await bridge.get_own_remote_user_id()

                bridge.inc_remote_call_counter("room.join")
                handle = await bridge.remote_client.join(self._remote_room_name)
                try:
                    await handle.subscribe_presence(self._on_presence)
                except Exception:
                    await handle.disconnect()
                    raise

            self._own_remote_user_id = own_user_id
            self._handle = handle
            self._state = RoomState.ACTIVE
            self._consumer = asyncio.create_task(
                self._consume(handle), name=f"roombridge:{self._remote_room_name}"
            )
        logger.info(
            "Joined remote room %s (%s)",
            self._remote_room_name,
            handle.room_id,
            extra={"remote_room": self._remote_room_name, "remote_room_id": handle.room_id},
        )

    async def stop_and_leave(self) -> None:
        """Disconnect from the remote room and leave it.

        Only valid once started. Calling it again while stopping or after
        stopping does nothing, so the remote room is left exactly once.
        """
        async with self._lock:
            await self._stop_and_leave()

    async def _stop_and_leave(self) -> None:
        if self._state in (RoomState.STOPPING, RoomState.STOPPED):
            logger.debug(
                "%s already %s",
                self._remote_room_name,
                self._state,
                extra={"remote_room": self._remote_room_name},
            )
            return
        if self._state != RoomState.ACTIVE:
            raise RoomStateError(f"Cannot stop {self._remote_room_name}: never started")

        handle = self._handle
        own_user_id = self._own_remote_user_id
        assert handle is not None and own_user_id is not None
        self._state = RoomState.STOPPING

        bridge = self._bridge
        with bridge.telemetry.span(SpanKind.ROOM_STOP, self._remote_room_name):
            # Disconnect first so no further events are processed mid-teardown
            try:
                await handle.disconnect()
            except Exception:
                logger.exception(
                    "Disconnecting from %s failed",
                    self._remote_room_name,
                    extra={"remote_room": self._remote_room_name},
                )

            bridge.inc_remote_call_counter("room.leave")
            try:
                await handle.remove_user(own_user_id)
            except Exception:
                # The home side no longer wants the room; stay stopped even
                # if the remote side did not let us go cleanly.
                logger.exception(
                    "Leaving %s failed",
                    self._remote_room_name,
                    extra={"remote_room": self._remote_room_name},
                )
            finally:
                self._handle = None
                self._own_remote_user_id = None
                self._state = RoomState.STOPPED

        consumer = self._consumer
        if consumer is not None and not consumer.done():
            # In-flight relays may finish; a stream that never ends may not
            asyncio.get_running_loop().call_later(bridge.config.stop_grace, consumer.cancel)

        logger.info(
            "Left remote room %s",
            self._remote_room_name,
            extra={"remote_room": self._remote_room_name},
        )

    async def wait_stopped(self) -> None:
        """Wait for the stream consumer to finish after the room stopped.

        A stream that keeps going after disconnect is cancelled once
        ``BridgeConfig.stop_grace`` has passed, so this always returns.
        """
        consumer = self._consumer
        if consumer is not None and consumer is not asyncio.current_task():
            await asyncio.wait({consumer})

    # -- Relay entry points --

    async def on_inbound_remote_event(self, event: RemoteEvent) -> list[DeliveryResult]:
        """Relay one remote stream event to every linked home room."""
        if self._state != RoomState.ACTIVE:
            logger.debug(
                "Dropping remote event for %s in state %s",
                self._remote_room_name,
                self._state,
                extra={"remote_room": self._remote_room_name},
            )
            return []
        return await self._relay.relay_inbound(event)

    async def on_outbound_home_message(self, message: HomeMessage) -> list[DeliveryResult]:
        """Relay a home message to the remote room and to sibling home rooms."""
        if self._state != RoomState.ACTIVE:
            raise RoomStateError(
                f"Cannot relay to {self._remote_room_name} in state {self._state}"
            )
        return await self._relay.relay_outbound(message)

    # -- Stream consumers --

    async def _consume(self, handle: RemoteRoomHandle) -> None:
        async for event in handle.messages():
            try:
                await self.on_inbound_remote_event(event)
            except Exception:
                logger.exception(
                    "Failed to relay remote event in %s",
                    self._remote_room_name,
                    extra={"remote_room": self._remote_room_name},
                )

    async def _on_presence(self, event: PresenceEvent) -> None:
        handle = self._handle
        if handle is None:
            return
        try:
            user = await self._bridge.get_remote_user_by_id(event.user_id)
            if user is not None:
                await user.set_room_presence(handle.room_id, event.status == PresenceStatus.IN)
        except Exception:
            logger.exception(
                "Presence update for %s failed",
                event.user_id,
                extra={"remote_room": self._remote_room_name, "sender": event.user_id},
            )
