"""Remote-network collaborator interfaces."""

from roombridge.remote.base import (
    PresenceHandler,
    RemoteIdentityResolver,
    RemoteRoomClient,
    RemoteRoomHandle,
)
from roombridge.remote.mock import (
    MockRemoteIdentityResolver,
    MockRemoteRoomClient,
    MockRemoteRoomHandle,
)

__all__ = [
    "MockRemoteIdentityResolver",
    "MockRemoteRoomClient",
    "MockRemoteRoomHandle",
    "PresenceHandler",
    "RemoteIdentityResolver",
    "RemoteRoomClient",
    "RemoteRoomHandle",
]
