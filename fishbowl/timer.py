from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from fishbowl.core.errors import GameError
from fishbowl.core.game import StartedTurn
from fishbowl.core.turn import Turn
from fishbowl.lock import GameHandle

logger = logging.getLogger(__name__)

# Called with the ended turn and the number of clues still in the bowl.
OnTurnEnded = Callable[[Turn, int], Awaitable[None]]


class TurnTimers:
    """Background guess timers.

    Each timer sleeps with no lock held, then takes the write lock just long enough to
    end the turn it was started for. If the game has moved on in the meantime the
    `end_turn` call is rejected and the timer quietly does nothing.
    """

    def __init__(self, *, turn_seconds: float) -> None:
        self.turn_seconds = turn_seconds
        self._tasks: set[asyncio.Task[None]] = set()

    def schedule(self, handle: GameHandle, started: StartedTurn, on_end: OnTurnEnded) -> asyncio.Task[None]:
        task = asyncio.create_task(self._run(handle, started, on_end))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, handle: GameHandle, started: StartedTurn, on_end: OnTurnEnded) -> None:
        await asyncio.sleep(self.turn_seconds)

        turn = started.turn
        try:
            async with handle.write() as game:
                ended = game.end_turn(turn.performer, turn.guesser, started.round_number)
                clues_left = game.bowl.num_unsolved()
        except GameError as e:
            logger.info(
                "Ignoring timer for %s -> %s in round %s: %s",
                turn.performer,
                turn.guesser,
                started.round_number,
                e,
            )
            return

        await on_end(ended, clues_left)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
