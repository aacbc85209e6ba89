"""Bridge: the collaborators every bridged room shares."""

from __future__ import annotations

import logging

from roombridge.home.base import BridgeUser, HomeSendIntent, NameMangler, UserMapper
from roombridge.models.config import BridgeConfig
from roombridge.models.enums import Side
from roombridge.models.message import RemoteUser
from roombridge.remote.base import RemoteIdentityResolver, RemoteRoomClient
from roombridge.telemetry.base import Attr, TelemetryProvider
from roombridge.telemetry.noop import NoopTelemetryProvider

logger = logging.getLogger("roombridge.bridge")

__all__ = [
    "Bridge",
    "RoomBridgeError",
    "RoomStateError",
]


class RoomBridgeError(Exception):
    """Base exception for all roombridge errors."""


class RoomStateError(RoomBridgeError):
    """Operation not allowed in the room's current lifecycle state."""


class Bridge:
    """Shared services for all :class:`BridgedRoom` instances.

    Holds the remote client and identity resolver, the home-side user
    mapping, name mangling and the bot's own send intent, plus the
    telemetry provider that backs the bridge's counters.
    """

    def __init__(
        self,
        remote_client: RemoteRoomClient,
        identity_resolver: RemoteIdentityResolver,
        user_mapper: UserMapper,
        name_mangler: NameMangler,
        bot_intent: HomeSendIntent,
        telemetry: TelemetryProvider | None = None,
        config: BridgeConfig | None = None,
    ) -> None:
        self.remote_client = remote_client
        self.identity_resolver = identity_resolver
        self.user_mapper = user_mapper
        self.name_mangler = name_mangler
        self.bot_intent = bot_intent
        self.telemetry: TelemetryProvider = telemetry or NoopTelemetryProvider()
        self.config = config or BridgeConfig()

    async def get_own_remote_user_id(self) -> str:
        return await self.identity_resolver.resolve_own_user_id()

    async def map_remote_user(self, remote_user: RemoteUser) -> BridgeUser:
        return await self.user_mapper.map_remote_user(remote_user)

    async def get_remote_user_by_id(self, user_id: str) -> BridgeUser | None:
        return await self.user_mapper.get_remote_user_by_id(user_id)

    def mangle_name(self, user_id: str) -> str:
        return self.name_mangler.mangle(user_id)

    # -- Counters --

    def inc_counter(self, name: str, side: Side) -> None:
        self.telemetry.increment(name, {Attr.SIDE: str(side)})

    def inc_remote_call_counter(self, name: str) -> None:
        self.telemetry.increment("remote_api_calls", {Attr.METHOD: name})
