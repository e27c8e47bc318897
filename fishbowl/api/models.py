from __future__ import annotations

from pydantic import BaseModel, Field

from fishbowl.commands import Caller
from fishbowl.core.player import Player
from fishbowl.respond import Reply


class UserRef(BaseModel):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)

    def to_player(self) -> Player:
        return Player(name=self.name, identity=self.user_id)


class CallerModel(UserRef):
    # True when the command was sent as a direct message.
    private: bool = False

    def to_caller(self) -> Caller:
        return Caller(user_id=self.user_id, name=self.name, private=self.private)


class CommandRequest(BaseModel):
    caller: CallerModel
    channel_id: str | None = None
    text: str | None = Field(default=None, max_length=500)
    mentions: list[UserRef] = Field(default_factory=list)


class ReplyModel(BaseModel):
    react: str | None = None
    content: str | None = None
    channel_id: str | None = None
    dm_to: str | None = None
    redact_after: float | None = None

    @classmethod
    def from_reply(cls, reply: Reply) -> ReplyModel:
        return cls(
            react=reply.react,
            content=reply.content,
            channel_id=reply.channel_id,
            dm_to=None if reply.dm_to is None else str(reply.dm_to),
            redact_after=reply.redact_after,
        )


class StatusResponse(BaseModel):
    status: str
    round_number: int | None = None
    performer: str | None = None


class PlayersResponse(BaseModel):
    players: list[UserRef]


class MailboxMessage(BaseModel):
    id: str
    fields: dict[str, str]


class MailboxResponse(BaseModel):
    user_id: str
    stream: str
    messages: list[MailboxMessage]
