from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fishbowl.core.game import Game


class RWLock:
    """asyncio reader/writer lock.

    Any number of readers, or a single writer. Once a writer is waiting, new readers
    queue behind it so a steady stream of `status` calls can't starve a turn ending.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            except asyncio.CancelledError:
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def locked(self) -> bool:
        return self._writer or self._readers > 0


class GameHandle:
    """The one shared Game, guarded by a reader/writer lock.

    Contract:
      - `async with handle.read() as game:` for queries; readers run together.
      - `async with handle.write() as game:` for anything that mutates.
      - never await anything slow (sleeps, network) while holding either.
    """

    def __init__(self, game: Game) -> None:
        self._game = game
        self._lock = RWLock()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[Game]:
        async with self._lock.read():
            yield self._game

    @asynccontextmanager
    async def write(self) -> AsyncIterator[Game]:
        async with self._lock.write():
            yield self._game

    async def reset(self) -> Game:
        """Throw the current game away and start a fresh one with the same configuration."""

        async with self._lock.write():
            self._game = self._game.fresh()
            return self._game

    @property
    def lock(self) -> RWLock:
        return self._lock
