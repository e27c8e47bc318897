from __future__ import annotations

import asyncio
import logging
from collections.abc import Hashable
from dataclasses import dataclass, replace

import redis

from fishbowl.streams import Mailbox, publish_to_mailbox
from fishbowl.websocket_hub import ChannelWebSocketHub

logger = logging.getLogger(__name__)

OK = "👍"
FAILED = "❌"
REDACTED = "*REDACTED*"


@dataclass(frozen=True, slots=True)
class Reply:
    """What to say back after a command.

    - `react`: reaction to put on the caller's message.
    - `content`: text to send. With no `channel_id`/`dm_to` it's a plain reply to the caller.
    - `channel_id`: post `content` to that channel.
    - `dm_to`: send `content` privately to the player with that identity.
    - `redact_after`: blank the sent content out after this many seconds.
    """

    react: str | None = None
    content: str | None = None
    channel_id: str | None = None
    dm_to: Hashable | None = None
    redact_after: float | None = None

    @staticmethod
    def ok(content: str | None = None) -> Reply:
        return Reply(react=OK, content=content)

    @staticmethod
    def failed(error: Exception) -> Reply:
        return Reply(react=FAILED, content=str(error))

    def to_channel(self, channel_id: str | None) -> Reply:
        return replace(self, channel_id=channel_id)

    def privately(self, identity: Hashable, *, redact_after: float | None = None) -> Reply:
        return replace(self, dm_to=identity, redact_after=redact_after)


@dataclass(frozen=True, slots=True)
class Delivery:
    channel_message_id: str | None = None
    mailbox_entry_id: str | None = None


class Outbox:
    """Sends replies out: channel messages over the websocket hub, DMs into Redis mailboxes."""

    def __init__(self, *, r: redis.Redis, hub: ChannelWebSocketHub) -> None:
        self._r = r
        self._hub = hub
        self._tasks: set[asyncio.Task[None]] = set()

    async def deliver(self, reply: Reply) -> Delivery:
        if reply.content is None:
            return Delivery()

        channel_message_id: str | None = None
        mailbox_entry_id: str | None = None

        if reply.channel_id is not None:
            channel_message_id = await self._hub.post(reply.channel_id, reply.content)

        if reply.dm_to is not None:
            mailbox_entry_id = publish_to_mailbox(
                r=self._r,
                mailbox=Mailbox.for_identity(reply.dm_to),
                fields={"type": "message", "content": reply.content},
            )

        delivery = Delivery(channel_message_id=channel_message_id, mailbox_entry_id=mailbox_entry_id)
        if reply.redact_after is not None:
            self._spawn(self._redact_later(reply, delivery))
        return delivery

    async def _redact_later(self, reply: Reply, delivery: Delivery) -> None:
        await asyncio.sleep(reply.redact_after or 0)
        logger.debug("Redacting %s", delivery)
        if reply.channel_id is not None and delivery.channel_message_id is not None:
            await self._hub.redact(reply.channel_id, delivery.channel_message_id, replacement=REDACTED)
        if reply.dm_to is not None and delivery.mailbox_entry_id is not None:
            publish_to_mailbox(
                r=self._r,
                mailbox=Mailbox.for_identity(reply.dm_to),
                fields={"type": "redact", "ref": delivery.mailbox_entry_id, "content": REDACTED},
            )

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for pending redactions (tests, shutdown)."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
