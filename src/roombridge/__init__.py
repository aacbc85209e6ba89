"""roombridge - async relay that mirrors rooms between two chat networks."""

from roombridge._version import __version__
from roombridge.core.bridge import Bridge, RoomBridgeError, RoomStateError
from roombridge.core.bridged_room import BridgedRoom
from roombridge.core.edit_diff import EditCache, compute_edit_diff
from roombridge.core.formatting import (
    escape_html,
    final_word,
    first_word,
    quotemeta,
    strip_self_mention,
)
from roombridge.core.relay import MessageRelay
from roombridge.home.base import (
    BridgeUser,
    HomeSendIntent,
    LocalpartNameMangler,
    NameMangler,
    UserMapper,
)
from roombridge.home.config import MatrixConfig
from roombridge.home.matrix import MatrixSendIntent
from roombridge.models.config import BridgeConfig
from roombridge.models.delivery import DeliveryResult, SendResult
from roombridge.models.enums import (
    HomeMsgType,
    PresenceStatus,
    RemoteOperation,
    RoomState,
    Side,
)
from roombridge.models.message import (
    EditDiff,
    HomeMessage,
    HomeMessageContent,
    PresenceEvent,
    RemoteEvent,
    RemoteMessage,
    RemoteUser,
)
from roombridge.remote.base import (
    PresenceHandler,
    RemoteIdentityResolver,
    RemoteRoomClient,
    RemoteRoomHandle,
)
from roombridge.telemetry import (
    LoggingTelemetryProvider,
    MockTelemetryProvider,
    NoopTelemetryProvider,
    TelemetryProvider,
)

__all__ = [
    "Bridge",
    "BridgeConfig",
    "BridgeUser",
    "BridgedRoom",
    "DeliveryResult",
    "EditCache",
    "EditDiff",
    "HomeMessage",
    "HomeMessageContent",
    "HomeMsgType",
    "HomeSendIntent",
    "LocalpartNameMangler",
    "LoggingTelemetryProvider",
    "MatrixConfig",
    "MatrixSendIntent",
    "MessageRelay",
    "MockTelemetryProvider",
    "NameMangler",
    "NoopTelemetryProvider",
    "PresenceEvent",
    "PresenceHandler",
    "PresenceStatus",
    "RemoteEvent",
    "RemoteIdentityResolver",
    "RemoteMessage",
    "RemoteOperation",
    "RemoteRoomClient",
    "RemoteRoomHandle",
    "RemoteUser",
    "RoomBridgeError",
    "RoomState",
    "RoomStateError",
    "SendResult",
    "Side",
    "TelemetryProvider",
    "UserMapper",
    "__version__",
    "compute_edit_diff",
    "escape_html",
    "final_word",
    "first_word",
    "quotemeta",
    "strip_self_mention",
]
