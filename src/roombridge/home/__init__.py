"""Home-network collaborator interfaces."""

from roombridge.home.base import (
    BridgeUser,
    HomeSendIntent,
    LocalpartNameMangler,
    NameMangler,
    UserMapper,
)
from roombridge.home.config import MatrixConfig
from roombridge.home.matrix import MatrixSendIntent
from roombridge.home.mock import (
    MockBridgeUser,
    MockNameMangler,
    MockSendIntent,
    MockUserMapper,
)

__all__ = [
    "BridgeUser",
    "HomeSendIntent",
    "LocalpartNameMangler",
    "MatrixConfig",
    "MatrixSendIntent",
    "MockBridgeUser",
    "MockNameMangler",
    "MockSendIntent",
    "MockUserMapper",
    "NameMangler",
    "UserMapper",
]
