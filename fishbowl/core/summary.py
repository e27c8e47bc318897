from __future__ import annotations

from dataclasses import dataclass

from fishbowl.core.player import Clue


@dataclass(frozen=True, slots=True)
class TurnSummary:
    """Clues solved during one turn, in the order they were confirmed."""

    clues: tuple[Clue, ...] = ()

    def with_clue(self, clue: Clue) -> TurnSummary:
        return TurnSummary(clues=(*self.clues, clue))

    @property
    def num_solved(self) -> int:
        return len(self.clues)

    def __len__(self) -> int:
        return len(self.clues)

    def __iter__(self):
        return iter(self.clues)
