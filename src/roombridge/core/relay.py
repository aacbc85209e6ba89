"""MessageRelay: moves messages between a remote room and its home rooms."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from roombridge.core.edit_diff import EditCache, compute_edit_diff
from roombridge.core.formatting import (
    echo_html,
    remote_emote_text,
    remote_plain_text,
    strip_self_mention,
)
from roombridge.home.base import HomeSendIntent
from roombridge.models.delivery import DeliveryResult
from roombridge.models.enums import HomeMsgType, RemoteOperation, Side
from roombridge.models.message import (
    HomeMessage,
    HomeMessageContent,
    RemoteEvent,
    RemoteMessage,
)
from roombridge.telemetry.base import Attr, SpanKind

if TYPE_CHECKING:
    from roombridge.core.bridge import Bridge
    from roombridge.core.bridged_room import BridgedRoom

logger = logging.getLogger("roombridge.relay")

_RELAYED_OPERATIONS = (RemoteOperation.CREATE, RemoteOperation.UPDATE)


class MessageRelay:
    """Relays messages in both directions for one :class:`BridgedRoom`.

    Remote messages are shown in every linked home room through the
    sender's ghost; edits are rendered as a diff against the sender's
    previous message. Home messages are posted into the remote room under
    a mangled sender label and echoed, as the bridge bot, into the other
    linked home rooms.
    """

    def __init__(self, room: BridgedRoom, bridge: Bridge, edit_cache: EditCache) -> None:
        self._room = room
        self._bridge = bridge
        self._edit_cache = edit_cache

    # -- Remote -> home --

    async def relay_inbound(self, event: RemoteEvent) -> list[DeliveryResult]:
        """Relay one event from the remote message stream."""
        message = event.model
        if message is None:
            return []

        from_user = message.from_user
        if from_user is None or from_user.id == self._room.own_remote_user_id:
            # Reflection of something the bridge itself posted
            logger.debug(
                "Ignoring own message in %s",
                self._room.remote_room_name,
                extra={"remote_room": self._room.remote_room_name},
            )
            return []

        if event.operation not in _RELAYED_OPERATIONS:
            logger.debug(
                "Ignoring %s operation in %s",
                event.operation,
                self._room.remote_room_name,
                extra={"remote_room": self._room.remote_room_name},
            )
            return []

        return await self._relay_remote_message(message, event.operation)

    async def _relay_remote_message(
        self, message: RemoteMessage, operation: RemoteOperation | str
    ) -> list[DeliveryResult]:
        assert message.from_user is not None
        from_user = message.from_user
        room_name = self._room.remote_room_name
        telemetry = self._bridge.telemetry

        self._bridge.inc_counter("received_messages", Side.REMOTE)
        logger.info(
            "remote->%s from %s: %s",
            room_name,
            from_user.username,
            message.text,
            extra={"remote_room": room_name, "sender": from_user.id},
        )

        previous = self._edit_cache.record(message)

        with telemetry.span(
            SpanKind.RELAY_INBOUND,
            room_name,
            {
                Attr.SENDER: from_user.id,
                Attr.RELAY_OPERATION: str(operation),
                Attr.RELAY_EDITED: previous is not None,
            },
        ) as span:
            user = await self._bridge.map_remote_user(from_user)
            try:
                await user.update(from_user)
            except Exception:
                # A broken avatar or profile must not hold up the message;
                # relay with whatever profile the ghost already has.
                logger.warning(
                    "Updating user %s failed",
                    user.user_id,
                    exc_info=True,
                    extra={"remote_room": room_name, "sender": from_user.id},
                )

            content = self.build_home_content(message, previous)
            results = await self._fan_out(
                user.get_send_intent(), self._room.all_linked_room_ids(), content, Side.HOME
            )
            span.attributes[Attr.RELAY_TARGETS] = len(results)
            span.attributes[Attr.RELAY_DELIVERED] = sum(1 for r in results if r.success)
        return results

    def build_home_content(
        self, message: RemoteMessage, previous: RemoteMessage | None = None
    ) -> HomeMessageContent:
        """Build the home-side content for a remote message.

        *previous* is the cached earlier version of the message; when
        given, the content is an edit diff instead of the message itself.
        """
        config = self._bridge.config

        if previous is not None:
            diff = compute_edit_diff(previous.text, message.text, config)
            return HomeMessageContent(
                body=diff.body,
                format=config.html_format,
                formatted_body=diff.formatted_body,
            )

        body = message.text
        formatted_body: str | None = None
        if message.html != message.text:
            formatted_body = message.html

        msgtype = HomeMsgType.TEXT
        if message.status and message.from_user is not None:
            msgtype = HomeMsgType.EMOTE
            body, formatted_body = strip_self_mention(
                body, formatted_body, message.from_user.username
            )

        return HomeMessageContent(
            msgtype=msgtype,
            body=body,
            format=config.html_format if formatted_body is not None else None,
            formatted_body=formatted_body,
        )

    # -- Home -> remote --

    async def relay_outbound(self, message: HomeMessage) -> list[DeliveryResult]:
        """Post a home message to the remote room and echo it to sibling rooms."""
        handle = self._room.remote_room_handle
        assert handle is not None
        room_name = self._room.remote_room_name
        telemetry = self._bridge.telemetry

        self._bridge.inc_counter("received_messages", Side.HOME)
        sender = self._bridge.mangle_name(message.sender)
        body = message.content.body

        with telemetry.span(
            SpanKind.RELAY_OUTBOUND,
            room_name,
            {Attr.SENDER: message.sender, Attr.HOME_ROOM_ID: message.room_id},
        ) as span:
            try:
                if message.content.is_emote:
                    await handle.send_status(remote_emote_text(sender, body))
                else:
                    await handle.send(remote_plain_text(sender, body))
            except Exception:
                logger.exception(
                    "Failed to send to remote room %s",
                    room_name,
                    extra={"remote_room": room_name, "sender": message.sender},
                )
                self._bridge.inc_counter("failed_messages", Side.REMOTE)
            else:
                self._bridge.inc_counter("sent_messages", Side.REMOTE)

            # Other home rooms linked to the same remote room see the message
            # from the bridge bot, since it was never posted there.
            echo = HomeMessageContent(
                msgtype=HomeMsgType.TEXT,
                body=remote_plain_text(sender, body),
                format=self._bridge.config.html_format,
                formatted_body=echo_html(sender, body),
            )
            targets = [rid for rid in self._room.all_linked_room_ids() if rid != message.room_id]
            results = await self._fan_out(
                self._bridge.bot_intent, targets, echo, Side.REMOTE_ECHO
            )
            span.attributes[Attr.RELAY_TARGETS] = len(results)
        return results

    # -- Fan-out --

    async def _fan_out(
        self,
        intent: HomeSendIntent,
        room_ids: Sequence[str],
        content: HomeMessageContent,
        side: Side,
    ) -> list[DeliveryResult]:
        """Send *content* to every room concurrently; failures stay per room."""
        room_name = self._room.remote_room_name

        async def _deliver(room_id: str) -> DeliveryResult:
            try:
                result = await intent.send_message(room_id, content)
            except Exception as exc:
                logger.exception(
                    "Relay to %s failed",
                    room_id,
                    extra={"remote_room": room_name, "home_room_id": room_id},
                )
                self._bridge.inc_counter("failed_messages", side)
                return DeliveryResult(room_id=room_id, success=False, error=str(exc))

            if not result.success:
                logger.warning(
                    "Relay to %s rejected: %s",
                    room_id,
                    result.error,
                    extra={"remote_room": room_name, "home_room_id": room_id},
                )
                self._bridge.inc_counter("failed_messages", side)
                return DeliveryResult(room_id=room_id, success=False, error=result.error)

            self._bridge.inc_counter("sent_messages", side)
            return DeliveryResult(room_id=room_id, success=True, event_id=result.event_id)

        return list(await asyncio.gather(*(_deliver(rid) for rid in room_ids)))
