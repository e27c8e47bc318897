from __future__ import annotations

import random
from collections import deque
from collections.abc import Sequence

from fishbowl.core.errors import CurrentTurnNotYetFinished, EmptyTurnQueue, NoTurnsQueued
from fishbowl.core.player import Player
from fishbowl.core.turn import Turn
from fishbowl.core.turn_state import Ended, Guessing, Ready


class Round:
    """One round of the game: a round-robin queue of turns plus the turn being played.

    Turns are taken from the front of the queue. A finished pairing goes to the back,
    so it won't play again until every other pairing in the queue has had a go.
    """

    def __init__(self, round_number: int, turn_queue: Sequence[Turn] = ()) -> None:
        self.round_number = round_number
        self.turn_queue: deque[Turn] = deque(turn_queue)
        self.current_turn: Turn | None = None

    @classmethod
    def new(cls, round_number: int, players: Sequence[Player], *, rng: random.Random | None = None) -> Round:
        """Shuffle the players and have each one perform to the next one along (wrapping around)."""

        order = list(players)
        (rng or random.Random()).shuffle(order)
        n = len(order)
        turns = [Turn(order[i], order[(i + 1) % n]) for i in range(n)]
        return cls(round_number, turns)

    def prepare_turn(self) -> Turn:
        match self.current_turn:
            case None:
                pass
            case Turn(state=Ended()) as finished:
                self.turn_queue.append(finished.recycled())
            case Turn(state=Ready() | Guessing()):
                raise CurrentTurnNotYetFinished()

        if not self.turn_queue:
            raise EmptyTurnQueue()
        self.current_turn = self.turn_queue.popleft()
        return self.current_turn

    def start_turn(self) -> Turn:
        turn = self.require_turn()
        self.current_turn = turn.start()
        return self.current_turn

    def end_turn(self) -> Turn:
        turn = self.require_turn()
        self.current_turn = turn.end()
        return self.current_turn

    def require_turn(self) -> Turn:
        if self.current_turn is None:
            raise NoTurnsQueued()
        return self.current_turn

    def __repr__(self) -> str:
        return f"Round(round_number={self.round_number}, queued={len(self.turn_queue)}, current_turn={self.current_turn!r})"
