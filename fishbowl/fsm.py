from __future__ import annotations

from statemachine import State, StateMachine

from fishbowl.core.turn_state import TurnPhase, TurnState


class TurnFSM(StateMachine):
    """FSM guard around a Turn's state.

    - phases: ready -> guessing -> ended
    - the Turn value itself is immutable; the FSM only says whether a move is legal.
    """

    ready = State(TurnPhase.ready.value, value=TurnPhase.ready.value, initial=True)
    guessing = State(TurnPhase.guessing.value, value=TurnPhase.guessing.value)
    ended = State(TurnPhase.ended.value, value=TurnPhase.ended.value, final=True)

    begin_guessing = ready.to(guessing)
    finish = guessing.to(ended)

    def __init__(self, state: TurnState):
        super().__init__(start_value=state.phase.value)
