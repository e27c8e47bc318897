"""Chat commands.

Each command takes the shared runtime, who sent it, and its arguments, drives the
game through the lock, and returns a `Reply` describing what to say back. Game
errors are turned into a failed reply here so every caller renders them the same way.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from functools import wraps
from typing import Any

from fishbowl.core import game_state_text
from fishbowl.core.errors import (
    EmptyBowl,
    GameError,
    NoChannel,
    NotAGuildChannel,
    NotAPlayer,
    NotInPrivateChannel,
)
from fishbowl.core.game import End, Game, InRound, PreGame
from fishbowl.core.player import Clue, Player
from fishbowl.core.turn import Turn
from fishbowl.respond import Reply
from fishbowl.runtime import Runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Caller:
    user_id: str
    name: str
    # True when the command arrived as a direct message.
    private: bool = False

    @property
    def player(self) -> Player:
        return Player(name=self.name, identity=self.user_id)


Command = Callable[..., Awaitable[Reply]]

COMMANDS: dict[str, Command] = {}


def command(*names: str) -> Callable[[Command], Command]:
    """Register a command under one or more names and turn game errors into failed replies."""

    def decorator(fn: Command) -> Command:
        @wraps(fn)
        async def wrapper(rt: Runtime, caller: Caller, **kwargs: Any) -> Reply:
            try:
                return await fn(rt, caller, **kwargs)
            except GameError as e:
                logger.warning("%s: %s", caller.name, e)
                return Reply.failed(e)

        for name in names:
            COMMANDS[name] = wrapper
        return wrapper

    return decorator


def command_for(name: str) -> Command:
    cmd = COMMANDS.get(name)
    if cmd is None:
        raise ValueError(f"Unknown command: {name}")
    return cmd


async def dispatch(rt: Runtime, name: str, caller: Caller, **kwargs: Any) -> Reply:
    return await command_for(name)(rt, caller, **kwargs)


def _announce_turn(turn: Turn) -> str:
    return (
        f"Get ready {turn.performer}, you'll be performing to {turn.guesser} who will be guessing.\n"
        "Run `start-turn` to begin."
    )


def _turn_over_message(turn: Turn, clues_left: int) -> str:
    next_step = (
        "To move on to the next round run `advance`"
        if clues_left == 0
        else "To queue up the next turn run `next-turn`"
    )
    recap = game_state_text.turn_recap(performer=turn.performer, summary=turn.summary)
    return f"{recap}\n{game_state_text.clues_left(clues_left)}\n{next_step}"


def _round_intro(game: Game, round_number: int) -> str:
    return f"Round {round_number}! {game_state_text.round_rules(round_number)}"


def _require_player(game: Game, caller: Caller) -> None:
    if not game.is_player(caller.player):
        raise NotAPlayer()


def _queue_first_turn(game: Game) -> str:
    try:
        return _announce_turn(game.prepare_turn())
    except EmptyBowl:
        return game_state_text.clues_left(0)


# ============ Setting up ============

@command("reset", "reset-game")
async def reset(rt: Runtime, caller: Caller) -> Reply:
    await rt.handle.reset()
    # Also catches timers scheduled while the reset waited for the write lock.
    rt.timers.cancel_all()
    logger.info("Game reset by %s", caller.name)
    return Reply.ok()


@command("join")
async def join(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.write() as game:
        game.add_player(caller.player)
    return Reply.ok(f"Added {caller.name} to the game")


@command("add-players")
async def add_players(rt: Runtime, caller: Caller, mentions: Sequence[Player] = ()) -> Reply:
    async with rt.handle.write() as game:
        added = game.add_players(mentions)
    if not added:
        return Reply.ok("Nobody new to add")
    return Reply.ok("Added " + ", ".join(p.name for p in added) + " to the game")


@command("list-players")
async def list_players(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.read() as game:
        names = game.list_players()
    return Reply.ok(f"Players in game: {names or 'nobody yet'}")


@command("add-clue")
async def add_clue(rt: Runtime, caller: Caller, text: str = "") -> Reply:
    if not caller.private:
        raise NotInPrivateChannel()
    text = text.strip()
    if not text:
        raise GameError("You need to tell me what the clue is")
    async with rt.handle.write() as game:
        game.add_clue(Clue(entered_by=caller.player, text=text))
    return Reply.ok()


@command("start-game")
async def start_game(rt: Runtime, caller: Caller, channel_id: str | None = None) -> Reply:
    if caller.private:
        raise NotAGuildChannel()
    if not channel_id:
        raise NoChannel()
    async with rt.handle.write() as game:
        if isinstance(game.state, PreGame) and game.bowl.num_clues() == 0:
            raise EmptyBowl("Still waiting on a few more clues")
        game.start_game(channel_id)
        game.set_admin(caller.player)
        first_turn = _queue_first_turn(game)
        intro = _round_intro(game, 1)
    logger.info("Game started by %s in channel %s", caller.name, channel_id)
    content = f"Gather round folks, the game is about to begin!\n{intro}\n{first_turn}"
    return Reply.ok(content).to_channel(channel_id)


# ============ Playing ============

@command("advance", "next-round")
async def advance(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.write() as game:
        state = game.advance_game()
        channel = game.main_channel
        match state:
            case InRound(round=r):
                content = (
                    "ROUND OVER! All the clues have gone back into the bowl and we start again.\n"
                    f"{_round_intro(game, r.round_number)}\n{_queue_first_turn(game)}"
                )
            case End():
                content = game_state_text.GAME_FINISHED_MESSAGE
            case PreGame():
                content = game.status()
    return Reply.ok(content).to_channel(channel)


@command("next-turn")
async def next_turn(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.write() as game:
        turn = game.prepare_turn()
        channel = game.main_channel
    return Reply.ok(_announce_turn(turn)).to_channel(channel)


@command("start-turn")
async def start_turn(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.write() as game:
        started = game.start_turn()
        channel = game.main_channel

    async def _on_end(ended: Turn, clues_left: int) -> None:
        await rt.outbox.deliver(Reply(content=_turn_over_message(ended, clues_left)).to_channel(channel))

    rt.timers.schedule(rt.handle, started, _on_end)

    performer = started.turn.performer
    content = (
        f"Ready {performer}? GO! You have {rt.timers.turn_seconds:g} seconds.\n"
        f"{performer}, DM me `draw` for each clue."
    )
    return Reply.ok(content).to_channel(channel)


@command("draw", "next-clue")
async def draw(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.write() as game:
        _require_player(game, caller)
        result = game.draw_clue(caller.player)
        if result.clue is None:
            # Nothing left to draw, so the turn is over right now.
            ended = game.end_turn(result.performer, result.guesser, game.current_round().round_number)
            content = "The bowl is empty!\n" + _turn_over_message(ended, game.bowl.num_unsolved())
            return Reply.ok(content).to_channel(game.main_channel)

    return Reply.ok(f"Your clue is:\n\n\t\t{result.clue.text}").privately(
        caller.user_id, redact_after=rt.settings.redact_after_seconds
    )


@command("summary", "clue-summary")
async def summary(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.read() as game:
        _require_player(game, caller)
        turn_summary = game.turn_summary()
        performer = game.current_round().require_turn().performer
    content = game_state_text.turn_recap(performer=performer, summary=turn_summary)
    return Reply.ok(content).privately(caller.user_id, redact_after=rt.settings.redact_after_seconds)


# ============ Looking around ============

@command("status", "game-state")
async def status(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.read() as game:
        text = game.status()
    return Reply.ok(text)


@command("rules")
async def rules(rt: Runtime, caller: Caller) -> Reply:
    async with rt.handle.read() as game:
        text = game.round_rules()
    return Reply.ok(text)
