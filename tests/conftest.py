from __future__ import annotations

import random
from collections.abc import Generator

import fakeredis
import pytest

from fishbowl.core.game import Game
from fishbowl.core.player import Clue, Player
from fishbowl.runtime import Runtime, build_runtime, init_runtime, reset_runtime_for_tests
from fishbowl.settings import GameSettings


@pytest.fixture()
def alice() -> Player:
    return Player(name="Alice", identity="u-alice")


@pytest.fixture()
def bob() -> Player:
    return Player(name="Bob", identity="u-bob")


@pytest.fixture()
def carol() -> Player:
    return Player(name="Carol", identity="u-carol")


@pytest.fixture()
def game() -> Game:
    # Seeded so shuffles are repeatable within a test run.
    return Game(rng=random.Random(1234))


@pytest.fixture()
def fill_bowl():
    """Put clues by one player into a pre-game bowl."""

    def _fill(game: Game, by: Player, *texts: str) -> list[Clue]:
        clues = [Clue(entered_by=by, text=t) for t in texts]
        for c in clues:
            game.add_clue(c)
        return clues

    return _fill


@pytest.fixture()
def test_settings() -> GameSettings:
    return GameSettings(num_rounds=3, turn_seconds=0.2, redact_after_seconds=0.01, min_players=2)


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def runtime(test_settings: GameSettings, redis_client: fakeredis.FakeRedis) -> Generator[Runtime, None, None]:
    """A private runtime for command-level tests (not the app singleton)."""

    rt = build_runtime(settings=test_settings, r=redis_client)
    yield rt
    rt.timers.cancel_all()
    rt.outbox.cancel_all()


@pytest.fixture()
def app_runtime(test_settings: GameSettings, redis_client: fakeredis.FakeRedis) -> Generator[Runtime, None, None]:
    """The app-wide runtime singleton, backed by fakeredis."""

    reset_runtime_for_tests()
    rt = init_runtime(settings=test_settings, r=redis_client)
    yield rt
    reset_runtime_for_tests()
