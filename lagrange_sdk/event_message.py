"""Message events: group and private chat messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .response import _object, _value

EVENT_GROUP_MSG = "group"
EVENT_PRIVATE_MSG = "private"


@dataclass
class MessageData:
    """One segment of a received message, with its data fields kept flat."""

    type: str = ""
    text: str = ""
    file: str = ""
    data: str = ""
    url: str = ""
    qq: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> MessageData:
        p = _object(payload, "segment")
        d = _object(p.get("data", p.get("Data")), "segment data")
        return cls(
            type=_value(p, "type", str, ""),
            text=_value(d, "text", str, ""),
            file=_value(d, "file", str, ""),
            data=_value(d, "data", str, ""),
            url=_value(d, "url", str, ""),
            qq=_value(d, "qq", str, ""),
            id=_value(d, "id", str, ""),
        )


@dataclass
class Sender:
    """The sender of a message as reported with the event."""

    user_id: int = 0
    nickname: str = ""
    card: str = ""
    sex: str = ""
    age: int = 0
    area: str = ""
    level: str = ""
    role: str = ""
    title: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> Sender:
        p = _object(payload, "sender")
        return cls(
            user_id=_value(p, "user_id", int, 0),
            nickname=_value(p, "nickname", str, ""),
            card=_value(p, "card", str, ""),
            sex=_value(p, "sex", str, ""),
            age=_value(p, "age", int, 0),
            area=_value(p, "area", str, ""),
            level=_value(p, "level", str, ""),
            role=_value(p, "role", str, ""),
            title=_value(p, "title", str, ""),
        )


@dataclass
class EventMessage:
    """A received chat message."""

    message_type: str = ""
    sub_type: str = ""
    message_id: int = 0
    group_id: int = 0
    user_id: int = 0
    anonymous: Any = None
    message: list[MessageData] = field(default_factory=list)
    raw_message: str = ""
    font: int = 0
    sender: Sender = field(default_factory=Sender)

    @classmethod
    def from_dict(cls, payload: Any) -> EventMessage:
        p = _object(payload, "message event")
        segments = p.get("message")
        if segments is None:
            segments = []
        if not isinstance(segments, list):
            raise ValueError(f"field 'message' must be a list, got {segments!r}")
        return cls(
            message_type=_value(p, "message_type", str, ""),
            sub_type=_value(p, "sub_type", str, ""),
            message_id=_value(p, "message_id", int, 0),
            group_id=_value(p, "group_id", int, 0),
            user_id=_value(p, "user_id", int, 0),
            anonymous=p.get("anonymous"),
            message=[MessageData.from_dict(s) for s in segments],
            raw_message=_value(p, "raw_message", str, ""),
            font=_value(p, "font", int, 0),
            sender=Sender.from_dict(p.get("sender")),
        )

    def display_card(self) -> str:
        """The sender's group card, falling back to the nickname."""
        return self.sender.card or self.sender.nickname

    def is_from_bot(self, bot_qq: int) -> bool:
        """Tell whether the bot itself sent the message."""
        return self.sender.user_id == bot_qq

    def at_bot(self, bot_qq: int) -> bool:
        """Tell whether any segment refers to the bot's QQ number."""
        target = str(bot_qq)
        return any(seg.qq == target for seg in self.message)

    def types(self) -> list[str]:
        return [seg.type for seg in self.message]

    def texts(self) -> list[str]:
        return [seg.text for seg in self.message]

    def files(self) -> list[str]:
        return [seg.file for seg in self.message]

    def urls(self) -> list[str]:
        return [seg.url for seg in self.message]

    def data(self) -> str:
        """All segments' data fields joined together."""
        return "".join(seg.data for seg in self.message)

    def qqs(self) -> list[str]:
        return [seg.qq for seg in self.message]

    def at_qqs(self) -> list[str]:
        """QQ numbers mentioned by ``at`` segments."""
        return [seg.qq for seg in self.message if seg.type == "at"]

    def ids(self) -> list[str]:
        return [seg.id for seg in self.message]