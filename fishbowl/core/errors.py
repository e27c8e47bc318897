"""Game errors.

Every engine operation either succeeds or raises one of these. They all derive from
`ValueError` so the outer layers can treat them like any other rejected input.
"""
from __future__ import annotations


class GameError(ValueError):
    """Base class for all expected game misuse."""

    message = "Can't do that right now"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


# ============ Game phase ============

class GameAlreadyStarted(GameError):
    message = "The game has already started"


class GameNotStartedYet(GameError):
    message = "The game hasn't started yet"


class GameFinished(GameError):
    message = "The game has finished"


class NoRound(GameError):
    message = "There isn't a round being played right now"


class NotEnoughPlayers(GameError):
    message = "Not enough players to start the game"


# ============ Channel ============

class NoChannel(GameError):
    message = "No channel to play the game in"


class NotAGuildChannel(GameError):
    message = "The game has to be played in a server channel, not a direct message"


class NotInPrivateChannel(GameError):
    message = "Umm... you're supposed to DM that to me"


# ============ Players ============

class PlayerAlreadyJoined(GameError):
    message = "That player is already in the game"


class NotAPlayer(GameError):
    message = "You aren't playing in this game"


# ============ Turns ============

class EmptyTurnQueue(GameError):
    message = "There are no turns left in the queue"


class NoTurnsQueued(GameError):
    message = "No turn has been queued up yet"


class CurrentTurnNotYetFinished(GameError):
    message = "The current turn hasn't finished yet"


class CurrentTurnNotYetStarted(GameError):
    message = "The current turn hasn't started yet"


class CurrentTurnHasEnded(GameError):
    message = "The current turn has already ended"


class TurnDoesntMatchPlayers(GameError):
    message = "That turn doesn't match the current performer and guesser"


class PlayerNotAllowedToDrawAClue(GameError):
    message = "Only the performer can draw a clue"


# ============ Bowl ============

class EmptyBowl(GameError):
    message = "There are no clues left in the bowl"


class BowlNotEmpty(GameError):
    message = "There are still clues left in the bowl"
