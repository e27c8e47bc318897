from __future__ import annotations

from fishbowl.runtime import Runtime, get_runtime


def get_game_runtime() -> Runtime:
    # Raises RuntimeError if startup didn't initialise the runtime; that's an operator problem, not a game error.
    return get_runtime()
