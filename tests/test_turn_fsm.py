from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from fishbowl.core.errors import CurrentTurnHasEnded, CurrentTurnNotYetFinished, CurrentTurnNotYetStarted
from fishbowl.core.player import Clue, Player
from fishbowl.core.summary import TurnSummary
from fishbowl.core.turn import Turn
from fishbowl.core.turn_state import Ended, Guessing, Ready, TurnPhase
from fishbowl.fsm import TurnFSM


def test_turn_goes_ready_guessing_ended(alice: Player, bob: Player) -> None:
    turn = Turn(alice, bob)
    assert isinstance(turn.state, Ready)

    guessing = turn.start()
    assert isinstance(guessing.state, Guessing)
    assert guessing.summary == TurnSummary()

    clue = Clue(bob, "cat")
    guessing = guessing.with_summary(guessing.summary.with_clue(clue))

    ended = guessing.end()
    assert isinstance(ended.state, Ended)
    assert ended.summary.clues == (clue,)
    assert ended.performer == alice and ended.guesser == bob


def test_ending_a_turn_that_never_started_is_rejected(alice: Player, bob: Player) -> None:
    with pytest.raises(CurrentTurnNotYetStarted):
        Turn(alice, bob).end()


def test_turn_cannot_start_twice_or_after_ending(alice: Player, bob: Player) -> None:
    guessing = Turn(alice, bob).start()
    with pytest.raises(CurrentTurnNotYetFinished):
        guessing.start()

    ended = guessing.end()
    with pytest.raises(CurrentTurnHasEnded):
        ended.start()
    with pytest.raises(CurrentTurnHasEnded):
        ended.end()


def test_summary_unavailable_before_start(alice: Player, bob: Player) -> None:
    with pytest.raises(CurrentTurnNotYetStarted):
        _ = Turn(alice, bob).summary


def test_recycled_turn_is_fresh_and_ready(alice: Player, bob: Player) -> None:
    ended = Turn(alice, bob).start().end()
    again = ended.recycled()
    assert isinstance(again.state, Ready)
    assert again.matches(alice, bob)
    assert again is not ended


def test_fsm_starts_from_the_turn_phase(alice: Player, bob: Player) -> None:
    fsm = TurnFSM(Turn(alice, bob).start().state)
    assert fsm.current_state.value == TurnPhase.guessing.value

    fsm.send("finish")
    assert fsm.current_state.value == TurnPhase.ended.value


def test_fsm_rejects_finishing_from_ready() -> None:
    fsm = TurnFSM(Ready())
    with pytest.raises(TransitionNotAllowed):
        fsm.send("finish")
    assert fsm.current_state.value == TurnPhase.ready.value
