from __future__ import annotations

from collections.abc import Sequence

from fishbowl.core.player import Player
from fishbowl.core.summary import TurnSummary
from fishbowl.core.turn import Turn
from fishbowl.core.turn_state import Ended, Guessing, Ready

GAME_FINISHED_MESSAGE = "Well that's it comrades, game over. Game over man!"

ROUND_RULES: dict[int, str] = {
    1: (
        "The performer can say anything they like to get their guesser to say the clue, "
        "as long as they don't say any of the words on it."
    ),
    2: (
        "This time the performer can only say *a single word*. They may say or do nothing else! "
        "No accents, no suggestive looks... JUST ONE WORD"
    ),
    3: (
        "This time the performer has to do *charades*. They can say nothing, no words, "
        "no sound effects... nothing!"
    ),
}


def round_rules(round_number: int) -> str:
    """Rules for a round. Anything past the last described round is played as charades."""

    return ROUND_RULES.get(round_number, ROUND_RULES[max(ROUND_RULES)])


def turn_status(turn: Turn) -> str:
    p, g = turn.performer, turn.guesser
    match turn.state:
        case Ready():
            return f"{p} is getting ready to perform to {g} who will be guessing"
        case Guessing():
            return f"{p} is performing for {g} who is guessing"
        case Ended():
            return f"{p} has finished performing for {g} who was guessing"


def pre_game_status(*, players: Sequence[Player], bowl_status: str) -> str:
    names = ", ".join(p.name for p in players) or "nobody yet"
    return "\n".join(["The game hasn't started yet.", f"Players: {names}", bowl_status])


def round_status(*, round_number: int, current_turn: Turn | None) -> str:
    if current_turn is None:
        turn_text = "No turn has been queued up yet"
    else:
        turn_text = turn_status(current_turn)
    return f"Round {round_number}: {turn_text}"


def performance_line(*, performer: Player, num_solved: int) -> str:
    if num_solved == 0:
        return f"Atrocious {performer}, you didn't get any!"
    if num_solved <= 2:
        return f"Ooft {performer} that was rough. You solved {num_solved}"
    if num_solved <= 4:
        return f"Hey not bad {performer}, you solved {num_solved}"
    return f"Nice work {performer}, you solved {num_solved}"


def turn_recap(*, performer: Player, summary: TurnSummary) -> str:
    line = performance_line(performer=performer, num_solved=summary.num_solved)
    if not summary.num_solved:
        return line
    clues = "\n\t\t".join(c.text for c in summary)
    return f"{line}\nJust to recap, these were the clues:\n\t\t{clues}"


def clues_left(num_unsolved: int) -> str:
    if num_unsolved == 0:
        return "No clues left"
    if num_unsolved == 1:
        return "Only one clue left!"
    return f"There are {num_unsolved} clues left to solve"
