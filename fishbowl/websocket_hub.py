from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from uuid import uuid4

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ChannelWebSocketHub:
    """In-process stand-in for the game's chat channels.

    Everyone watching a channel holds a websocket on it. What the game "says" in a
    channel is posted here as a `message` event with its own id, and blanking a
    message out later is a `redact` event pointing back at that id.
    """

    def __init__(self) -> None:
        self._watchers: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, channel_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._watchers[channel_id].add(websocket)
        logger.debug("Watcher joined channel %s", channel_id)

    async def disconnect(self, channel_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            watching = self._watchers.get(channel_id)
            if not watching:
                return
            watching.discard(websocket)
            if not watching:
                self._watchers.pop(channel_id, None)

    def watchers(self, channel_id: str) -> int:
        return len(self._watchers.get(channel_id, ()))

    async def post(self, channel_id: str, content: str) -> str:
        """Say something in a channel; returns the message id for a later `redact`."""

        message_id = uuid4().hex
        await self._send(channel_id, {"type": "message", "id": message_id, "content": content})
        return message_id

    async def redact(self, channel_id: str, message_id: str, *, replacement: str) -> None:
        await self._send(channel_id, {"type": "redact", "ref": message_id, "content": replacement})

    async def _send(self, channel_id: str, event: dict[str, str]) -> None:
        async with self._lock:
            watching = list(self._watchers.get(channel_id, ()))

        gone: list[WebSocket] = []
        for ws in watching:
            try:
                await ws.send_json(event)
            except Exception:
                logger.debug("Dropping closed websocket on channel %s", channel_id, exc_info=True)
                gone.append(ws)

        if gone:
            async with self._lock:
                for ws in gone:
                    self._watchers.get(channel_id, set()).discard(ws)


hub = ChannelWebSocketHub()
