from __future__ import annotations

import inspect
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from fishbowl.api.deps import get_game_runtime
from fishbowl.api.models import (
    CommandRequest,
    MailboxMessage,
    MailboxResponse,
    PlayersResponse,
    ReplyModel,
    StatusResponse,
    UserRef,
)
from fishbowl.commands import command_for
from fishbowl.runtime import Runtime
from fishbowl.streams import Mailbox, read_mailbox
from fishbowl.websocket_hub import hub

router = APIRouter()


def _command_kwargs(cmd, payload: CommandRequest) -> dict[str, Any]:
    """Pick out the arguments this command actually takes."""

    available: dict[str, Any] = {
        "channel_id": payload.channel_id,
        "text": payload.text or "",
        "mentions": [m.to_player() for m in payload.mentions],
    }
    params = inspect.signature(cmd).parameters
    return {k: v for k, v in available.items() if k in params}


@router.websocket("/ws/channel/{channel_id}")
async def channel_ws(websocket: WebSocket, channel_id: str) -> None:
    await hub.connect(channel_id, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(channel_id, websocket)
    except Exception:
        await hub.disconnect(channel_id, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/commands/{name}", response_model=ReplyModel)
async def command_route(
    name: str,
    payload: CommandRequest,
    rt: Runtime = Depends(get_game_runtime),
) -> ReplyModel:
    try:
        cmd = command_for(name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    reply = await cmd(rt, payload.caller.to_caller(), **_command_kwargs(cmd, payload))
    await rt.outbox.deliver(reply)
    return ReplyModel.from_reply(reply)


@router.get("/status", response_model=StatusResponse)
async def status_route(rt: Runtime = Depends(get_game_runtime)) -> StatusResponse:
    async with rt.handle.read() as game:
        performer = game.current_performer()
        return StatusResponse(
            status=game.status(),
            round_number=game.current_round_number(),
            performer=None if performer is None else performer.name,
        )


@router.get("/players", response_model=PlayersResponse)
async def players_route(rt: Runtime = Depends(get_game_runtime)) -> PlayersResponse:
    async with rt.handle.read() as game:
        players = [UserRef(user_id=str(p.identity), name=p.name) for p in game.players]
    return PlayersResponse(players=players)


@router.get("/mailbox/{user_id}", response_model=MailboxResponse)
async def mailbox_route(
    user_id: str,
    count: int = 20,
    start: str = "-",
    end: str = "+",
    rt: Runtime = Depends(get_game_runtime),
) -> MailboxResponse:
    """Debug endpoint: read a player's mailbox Redis Stream.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    mailbox = Mailbox.for_identity(user_id)
    try:
        entries = read_mailbox(r=rt.r, mailbox=mailbox, count=count, start=start, end=end)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    messages = [MailboxMessage(id=str(m["id"]), fields=dict(m["fields"])) for m in entries]
    return MailboxResponse(user_id=user_id, stream=mailbox.key, messages=messages)
