from __future__ import annotations

from dataclasses import dataclass, field

from statemachine.exceptions import TransitionNotAllowed

from fishbowl.core.errors import CurrentTurnNotYetStarted
from fishbowl.core.player import Player
from fishbowl.core.summary import TurnSummary
from fishbowl.core.turn_state import Ended, Guessing, Ready, TurnState, error_for_state
from fishbowl.fsm import TurnFSM


@dataclass(frozen=True, slots=True)
class Turn:
    performer: Player
    guesser: Player
    state: TurnState = field(default_factory=Ready)

    def start(self) -> Turn:
        self._guard("begin_guessing")
        return Turn(self.performer, self.guesser, Guessing(TurnSummary()))

    def end(self) -> Turn:
        self._guard("finish")
        return Turn(self.performer, self.guesser, Ended(self.summary))

    def with_summary(self, summary: TurnSummary) -> Turn:
        if not isinstance(self.state, Guessing):
            raise error_for_state(self.state)
        return Turn(self.performer, self.guesser, Guessing(summary))

    def recycled(self) -> Turn:
        """A fresh Ready turn for the same pairing."""

        return Turn(self.performer, self.guesser)

    def matches(self, performer: Player, guesser: Player) -> bool:
        return self.performer == performer and self.guesser == guesser

    @property
    def summary(self) -> TurnSummary:
        match self.state:
            case Ready():
                raise CurrentTurnNotYetStarted()
            case Guessing(summary) | Ended(summary):
                return summary

    def _guard(self, event: str) -> None:
        try:
            TurnFSM(self.state).send(event)
        except TransitionNotAllowed:
            raise error_for_state(self.state) from None
