from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from fishbowl.core import game_state_text
from fishbowl.core.bowl import Bowl
from fishbowl.core.errors import (
    BowlNotEmpty,
    EmptyBowl,
    GameAlreadyStarted,
    GameFinished,
    GameNotStartedYet,
    NoChannel,
    NoRound,
    NotEnoughPlayers,
    PlayerAlreadyJoined,
    PlayerNotAllowedToDrawAClue,
    TurnDoesntMatchPlayers,
)
from fishbowl.core.player import Clue, Player
from fishbowl.core.round import Round
from fishbowl.core.summary import TurnSummary
from fishbowl.core.turn import Turn
from fishbowl.core.turn_state import Guessing, error_for_state

logger = logging.getLogger(__name__)

DEFAULT_NUM_ROUNDS = 3
DEFAULT_MIN_PLAYERS = 2


@dataclass(frozen=True, slots=True)
class PreGame:
    pass


@dataclass(slots=True)
class InRound:
    round: Round


@dataclass(frozen=True, slots=True)
class End:
    pass


GameState = PreGame | InRound | End


class StartedTurn(NamedTuple):
    turn: Turn
    round_number: int


@dataclass(frozen=True, slots=True)
class DrawResult:
    clue: Clue | None
    performer: Player
    guesser: Player


class Game:
    """The whole game: players, the bowl and where we are (pre-game, a round, or the end).

    All mutation goes through the methods below. Each one either completes the
    transition or raises a `GameError` and leaves the game as it was.
    """

    def __init__(
        self,
        *,
        num_rounds: int = DEFAULT_NUM_ROUNDS,
        min_players: int = DEFAULT_MIN_PLAYERS,
        rng: random.Random | None = None,
    ) -> None:
        if num_rounds < 1:
            raise ValueError(f"num_rounds must be at least 1, got {num_rounds}")
        if min_players < 2:
            raise ValueError(f"min_players must be at least 2, got {min_players}")
        self.rng = rng or random.Random()
        self.players: list[Player] = []
        self.bowl = Bowl(rng=self.rng)
        self.state: GameState = PreGame()
        self.admin: Player | None = None
        self.num_rounds = num_rounds
        self.min_players = min_players
        self.main_channel: str | None = None

    def fresh(self) -> Game:
        """A brand new game with the same configuration."""

        return Game(num_rounds=self.num_rounds, min_players=self.min_players, rng=self.rng)

    # ============ Pre-game ============

    def set_admin(self, player: Player) -> None:
        self.admin = player

    def add_player(self, player: Player) -> None:
        self._require_pre_game()
        if player in self.players:
            raise PlayerAlreadyJoined(f"{player} is already in the game")
        self.players.append(player)

    def add_players(self, players: Iterable[Player]) -> list[Player]:
        """Add everyone not already playing; returns who was actually added."""

        self._require_pre_game()
        added: list[Player] = []
        for p in players:
            if p not in self.players:
                self.players.append(p)
                added.append(p)
        return added

    def add_clue(self, clue: Clue) -> None:
        self._require_pre_game()
        self.bowl.add_clue(clue)

    def start_game(self, channel: str) -> Round:
        self._require_pre_game()
        self._require_enough_players()
        self.main_channel = channel
        return self._enter_round(1)

    # ============ Rounds ============

    def advance_game(self) -> GameState:
        match self.state:
            case PreGame():
                if self.main_channel is None:
                    raise NoChannel()
                self._require_enough_players()
                self._enter_round(1)
            case InRound(round=r):
                if self.bowl.num_unsolved() > 0 or self.bowl.showing is not None:
                    raise BowlNotEmpty()
                if r.round_number < self.num_rounds:
                    self.bowl.refill()
                    self._enter_round(r.round_number + 1)
                else:
                    self.state = End()
                    logger.info("Game finished after round %s", r.round_number)
            case End():
                raise GameFinished()
        return self.state

    def prepare_turn(self) -> Turn:
        r = self._playing_round()
        if self.bowl.num_unsolved() == 0:
            raise EmptyBowl()
        return r.prepare_turn()

    def start_turn(self) -> StartedTurn:
        r = self._playing_round()
        turn = r.start_turn()
        logger.info("Round %s: %s started performing for %s", r.round_number, turn.performer, turn.guesser)
        return StartedTurn(turn=turn, round_number=r.round_number)

    def draw_clue(self, by: Player) -> DrawResult:
        """Draw the next clue for the performer.

        Asking for another clue means the one currently showing was solved, so it is
        recorded in the turn summary before the next one comes out of the bowl.
        """

        r = self._playing_round()
        turn = r.require_turn()
        if not isinstance(turn.state, Guessing):
            raise error_for_state(turn.state)
        if by != turn.performer:
            raise PlayerNotAllowedToDrawAClue()

        solved = self.bowl.solve_showing_clue()
        if solved is not None:
            turn = turn.with_summary(turn.state.summary.with_clue(solved))
            r.current_turn = turn

        clue = self.bowl.draw_clue()
        return DrawResult(clue=clue, performer=turn.performer, guesser=turn.guesser)

    def end_turn(self, performer: Player, guesser: Player, round_number: int) -> Turn:
        r = self._playing_round()
        turn = r.require_turn()
        if r.round_number != round_number or not turn.matches(performer, guesser):
            raise TurnDoesntMatchPlayers()
        ended = r.end_turn()
        self.bowl.put_back()
        logger.info(
            "Round %s: %s finished performing for %s with %s solved",
            r.round_number,
            ended.performer,
            ended.guesser,
            ended.summary.num_solved,
        )
        return ended

    # ============ Queries ============

    def turn_summary(self) -> TurnSummary:
        return self._playing_round().require_turn().summary

    def current_round(self) -> Round:
        match self.state:
            case InRound(round=r):
                return r
            case PreGame() | End():
                raise NoRound()

    def current_round_number(self) -> int | None:
        match self.state:
            case InRound(round=r):
                return r.round_number
            case PreGame() | End():
                return None

    def current_performer(self) -> Player | None:
        match self.state:
            case InRound(round=Round(current_turn=Turn(performer=p))):
                return p
            case _:
                return None

    def round_rules(self) -> str:
        return game_state_text.round_rules(self.current_round().round_number)

    def list_players(self) -> str:
        return ", ".join(p.name for p in self.players)

    def is_player(self, player: Player) -> bool:
        return player in self.players

    def status(self) -> str:
        match self.state:
            case PreGame():
                return game_state_text.pre_game_status(players=self.players, bowl_status=self.bowl.status())
            case InRound(round=r):
                return game_state_text.round_status(round_number=r.round_number, current_turn=r.current_turn)
            case End():
                return game_state_text.GAME_FINISHED_MESSAGE

    # ============ Internals ============

    def _require_pre_game(self) -> None:
        if not isinstance(self.state, PreGame):
            raise GameAlreadyStarted()

    def _require_enough_players(self) -> None:
        if len(self.players) < self.min_players:
            raise NotEnoughPlayers(
                f"Need at least {self.min_players} players to start the game, got {len(self.players)}"
            )

    def _playing_round(self) -> Round:
        match self.state:
            case PreGame():
                raise GameNotStartedYet()
            case InRound(round=r):
                return r
            case End():
                raise GameFinished()

    def _enter_round(self, round_number: int) -> Round:
        self.bowl.shuffle()
        r = Round.new(round_number, self.players, rng=self.rng)
        self.state = InRound(r)
        logger.info("Round %s started with %s players", round_number, len(self.players))
        return r
