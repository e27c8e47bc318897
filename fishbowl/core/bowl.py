from __future__ import annotations

import random
from collections import Counter

from fishbowl.core.player import Clue, Player


class Bowl:
    """The pool of clues.

    Every clue sits in exactly one of `unsolved`, `solved` or `showing`.
    The end of `unsolved` is the top of the bowl.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self.unsolved: list[Clue] = []
        self.solved: list[Clue] = []
        self.showing: Clue | None = None
        self._rng = rng or random.Random()

    def add_clue(self, clue: Clue) -> None:
        self.unsolved.append(clue)

    def shuffle(self) -> None:
        self._rng.shuffle(self.unsolved)

    def draw_clue(self) -> Clue | None:
        """Take the next clue out of the bowl and show it.

        Whatever was showing before must already have been solved or put back.
        """

        self.showing = self.unsolved.pop() if self.unsolved else None
        return self.showing

    def solve_showing_clue(self) -> Clue | None:
        clue = self.showing
        if clue is not None:
            self.solved.append(clue)
            self.showing = None
        return clue

    def put_back(self) -> Clue | None:
        clue = self.showing
        if clue is not None:
            self.unsolved.append(clue)
            self.showing = None
            self.shuffle()
        return clue

    def refill(self) -> Bowl:
        self.unsolved.extend(self.solved)
        self.solved = []
        if self.showing is not None:
            self.unsolved.append(self.showing)
            self.showing = None
        return self

    def num_unsolved(self) -> int:
        return len(self.unsolved)

    def num_solved(self) -> int:
        return len(self.solved)

    def num_clues(self) -> int:
        return len(self.unsolved) + len(self.solved) + (1 if self.showing is not None else 0)

    def clues_from(self, player: Player) -> list[Clue]:
        return [c for c in (*self.unsolved, *self.solved) if c.entered_by == player]

    def status(self) -> str:
        counts = Counter(c.entered_by.name for c in (*self.unsolved, *self.solved))
        if not counts:
            return "The bowl is empty"
        lines = [f"{name} has entered {n} clue{'' if n == 1 else 's'}" for name, n in sorted(counts.items())]
        return "\n".join(lines)
