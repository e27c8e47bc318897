from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from fishbowl.main import app
from fishbowl.runtime import Runtime
from fishbowl.settings import GameSettings


@pytest.fixture()
def test_settings() -> GameSettings:
    # Long enough that no turn times out while a test is talking to the app.
    return GameSettings(turn_seconds=30.0, redact_after_seconds=30.0)


@pytest.fixture()
def client(app_runtime: Runtime) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


def _caller(user_id: str, name: str, *, private: bool = False) -> dict:
    return {"user_id": user_id, "name": name, "private": private}


ALICE = _caller("u-alice", "Alice")
BOB = _caller("u-bob", "Bob")


def _set_up(client: TestClient) -> None:
    assert client.post("/commands/join", json={"caller": ALICE}).status_code == 200
    assert client.post("/commands/join", json={"caller": BOB}).status_code == 200
    for text in ("cat", "dog"):
        res = client.post(
            "/commands/add-clue",
            json={"caller": _caller("u-alice", "Alice", private=True), "text": text},
        )
        assert res.json()["react"] == "👍"


def test_healthcheck_and_info(client: TestClient) -> None:
    assert client.get("/healthcheck").json() == {"status": "ok"}
    assert client.get("/info").json()["name"] == "fishbowl"


def test_join_then_list_players(client: TestClient) -> None:
    res = client.post("/commands/join", json={"caller": ALICE})
    assert res.status_code == 200
    assert res.json()["content"] == "Added Alice to the game"

    res = client.post("/commands/add-players", json={"caller": ALICE, "mentions": [BOB]})
    assert res.json()["content"] == "Added Bob to the game"

    players = client.get("/players").json()["players"]
    assert players == [{"user_id": "u-alice", "name": "Alice"}, {"user_id": "u-bob", "name": "Bob"}]

    status = client.get("/status").json()
    assert status["round_number"] is None
    assert status["status"].startswith("The game hasn't started yet.")


def test_game_errors_come_back_as_failed_replies(client: TestClient) -> None:
    res = client.post("/commands/add-clue", json={"caller": ALICE, "text": "not private"})
    assert res.status_code == 200
    assert res.json()["react"] == "❌"


def test_unknown_command_is_404(client: TestClient) -> None:
    res = client.post("/commands/dance", json={"caller": ALICE})
    assert res.status_code == 404


def test_mailbox_count_is_bounded(client: TestClient) -> None:
    assert client.get("/mailbox/u-alice?count=0").status_code == 422
    assert client.get("/mailbox/u-alice?count=500").status_code == 422


def test_start_game_is_announced_on_the_channel(client: TestClient) -> None:
    _set_up(client)

    with client.websocket_connect("/ws/channel/chan-1") as ws:
        res = client.post("/commands/start-game", json={"caller": ALICE, "channel_id": "chan-1"})
        assert res.status_code == 200

        msg = ws.receive_json()
        assert msg["type"] == "message"
        assert "Gather round folks" in msg["content"]

    status = client.get("/status").json()
    assert status["round_number"] == 1
    assert status["performer"] in {"Alice", "Bob"}


def test_drawn_clue_lands_in_the_performers_mailbox(client: TestClient) -> None:
    _set_up(client)
    client.post("/commands/start-game", json={"caller": ALICE, "channel_id": "chan-1"})
    client.post("/commands/start-turn", json={"caller": ALICE})

    performer = client.get("/status").json()["performer"]
    user_id = "u-alice" if performer == "Alice" else "u-bob"

    res = client.post("/commands/draw", json={"caller": _caller(user_id, performer, private=True)})
    assert res.json()["dm_to"] == user_id

    data = client.get(f"/mailbox/{user_id}").json()
    assert data["stream"] == f"mailbox:{user_id}"
    assert data["messages"][0]["fields"]["type"] == "message"
    assert data["messages"][0]["fields"]["content"].startswith("Your clue is:")
