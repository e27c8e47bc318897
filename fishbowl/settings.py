from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameSettings:
    num_rounds: int = 3
    # How long the guesser has in each turn.
    turn_seconds: float = 60.0
    # Clues and summaries sent privately are blanked out after this long.
    redact_after_seconds: float = 10.0
    # Below two a player would end up performing to themselves.
    min_players: int = 2


def _env_number(name: str, default: float, cast: type = int, *, minimum: float | None = None):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e
    if minimum is not None and value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum:g}, got {raw!r}")
    return value


def settings_from_env() -> GameSettings:
    return GameSettings(
        num_rounds=_env_number("FISHBOWL_NUM_ROUNDS", 3, minimum=1),
        turn_seconds=_env_number("FISHBOWL_TURN_SECONDS", 60.0, float, minimum=0),
        redact_after_seconds=_env_number("FISHBOWL_REDACT_AFTER_SECONDS", 10.0, float, minimum=0),
        min_players=_env_number("FISHBOWL_MIN_PLAYERS", 2, minimum=2),
    )
