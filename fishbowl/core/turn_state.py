from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from fishbowl.core.errors import (
    CurrentTurnHasEnded,
    CurrentTurnNotYetFinished,
    CurrentTurnNotYetStarted,
    GameError,
)
from fishbowl.core.summary import TurnSummary


class TurnPhase(StrEnum):
    ready = "ready"
    guessing = "guessing"
    ended = "ended"


@dataclass(frozen=True, slots=True)
class Ready:
    phase: ClassVar[TurnPhase] = TurnPhase.ready


@dataclass(frozen=True, slots=True)
class Guessing:
    phase: ClassVar[TurnPhase] = TurnPhase.guessing

    summary: TurnSummary = field(default_factory=TurnSummary)


@dataclass(frozen=True, slots=True)
class Ended:
    phase: ClassVar[TurnPhase] = TurnPhase.ended

    summary: TurnSummary = field(default_factory=TurnSummary)


TurnState = Ready | Guessing | Ended


def error_for_state(state: TurnState) -> GameError:
    """The error to report when a turn in `state` can't make the requested move."""

    match state:
        case Ready():
            return CurrentTurnNotYetStarted()
        case Guessing():
            return CurrentTurnNotYetFinished()
        case Ended():
            return CurrentTurnHasEnded()
