from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable


@dataclass(frozen=True, slots=True)
class Player:
    """A person playing the game.

    `identity` is whatever the chat layer uses to recognise a user (a user id).
    Two players are the same player when their identities match, whatever their display name.
    """

    name: str = field(compare=False)
    identity: Hashable

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True, eq=False)
class Clue:
    """A secret clue put in the bowl.

    Compared by identity: two players may well enter the same text, and each entry is its own clue.
    """

    entered_by: Player
    text: str

    def __str__(self) -> str:
        return f'"{self.text}" added by {self.entered_by.name}'
