"""In-memory home network for testing."""

from __future__ import annotations

from roombridge.home.base import BridgeUser, HomeSendIntent, NameMangler, UserMapper
from roombridge.models.delivery import SendResult
from roombridge.models.message import HomeMessageContent, RemoteUser


class MockSendIntent(HomeSendIntent):
    """Records every message it is asked to send.

    Rooms listed in ``failing_rooms`` raise; rooms in ``rejecting_rooms``
    return an unsuccessful result instead.
    """

    def __init__(
        self,
        user_id: str = "@bridge:home",
        failing_rooms: set[str] | None = None,
        rejecting_rooms: set[str] | None = None,
    ) -> None:
        self.user_id = user_id
        self.failing_rooms = failing_rooms or set()
        self.rejecting_rooms = rejecting_rooms or set()
        self.sent: list[tuple[str, HomeMessageContent]] = []

    async def send_message(self, room_id: str, content: HomeMessageContent) -> SendResult:
        if room_id in self.failing_rooms:
            raise ConnectionError(f"cannot reach {room_id}")
        if room_id in self.rejecting_rooms:
            return SendResult(success=False, error="forbidden")
        self.sent.append((room_id, content))
        return SendResult(success=True, event_id=f"$event{len(self.sent)}")

    def sent_to(self, room_id: str) -> list[HomeMessageContent]:
        return [content for rid, content in self.sent if rid == room_id]


class MockBridgeUser(BridgeUser):
    """Ghost that records profile updates and presence changes."""

    def __init__(
        self,
        user_id: str,
        intent: MockSendIntent | None = None,
        update_error: Exception | None = None,
    ) -> None:
        self._user_id = user_id
        self.intent = intent or MockSendIntent(user_id=user_id)
        self.update_error = update_error
        self.updates: list[RemoteUser] = []
        self.presence: dict[str, bool] = {}

    @property
    def user_id(self) -> str:
        return self._user_id

    async def update(self, remote_user: RemoteUser) -> None:
        self.updates.append(remote_user)
        if self.update_error is not None:
            raise self.update_error

    async def set_room_presence(self, room_id: str, online: bool) -> None:
        self.presence[room_id] = online

    def get_send_intent(self) -> MockSendIntent:
        return self.intent


class MockUserMapper(UserMapper):
    """Creates one :class:`MockBridgeUser` per remote user ID, on demand."""

    def __init__(self, intent: MockSendIntent | None = None) -> None:
        # one shared intent makes fan-out assertions easy
        self.intent = intent
        self.users: dict[str, MockBridgeUser] = {}

    async def map_remote_user(self, remote_user: RemoteUser) -> MockBridgeUser:
        user = self.users.get(remote_user.id)
        if user is None:
            user = MockBridgeUser(f"@remote_{remote_user.username}:home", intent=self.intent)
            self.users[remote_user.id] = user
        return user

    async def get_remote_user_by_id(self, user_id: str) -> MockBridgeUser | None:
        return self.users.get(user_id)


class MockNameMangler(NameMangler):
    """Returns a configured label, or the user ID itself."""

    def __init__(self, labels: dict[str, str] | None = None) -> None:
        self.labels = labels or {}

    def mangle(self, user_id: str) -> str:
        return self.labels.get(user_id, user_id)
