from __future__ import annotations

from dataclasses import dataclass

import redis

from fishbowl.core.game import Game
from fishbowl.lock import GameHandle
from fishbowl.respond import Outbox
from fishbowl.settings import GameSettings
from fishbowl.timer import TurnTimers
from fishbowl.websocket_hub import ChannelWebSocketHub, hub


@dataclass(slots=True)
class Runtime:
    """Everything a command needs: the shared game, where replies go, and the turn timers."""

    settings: GameSettings
    r: redis.Redis
    handle: GameHandle
    outbox: Outbox
    timers: TurnTimers


_RUNTIME: Runtime | None = None


def build_runtime(*, settings: GameSettings, r: redis.Redis, channel_hub: ChannelWebSocketHub = hub) -> Runtime:
    game = Game(num_rounds=settings.num_rounds, min_players=settings.min_players)
    return Runtime(
        settings=settings,
        r=r,
        handle=GameHandle(game),
        outbox=Outbox(r=r, hub=channel_hub),
        timers=TurnTimers(turn_seconds=settings.turn_seconds),
    )


def init_runtime(*, settings: GameSettings, r: redis.Redis) -> Runtime:
    """Create the runtime once and cache it.

    Safe to call multiple times; subsequent calls return the already created instance.
    """

    global _RUNTIME
    if _RUNTIME is None:
        _RUNTIME = build_runtime(settings=settings, r=r)
    return _RUNTIME


def reset_runtime_for_tests() -> None:
    global _RUNTIME
    if _RUNTIME is not None:
        _RUNTIME.timers.cancel_all()
        _RUNTIME.outbox.cancel_all()
    _RUNTIME = None


def get_runtime() -> Runtime:
    if _RUNTIME is None:
        raise RuntimeError("Game runtime not initialized. Call init_runtime() at startup.")
    return _RUNTIME
