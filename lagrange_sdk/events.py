"""Decoding of events pushed by the bot over its websocket."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .event_message import EventMessage
from .event_notice import EventNotice
from .event_request import EventRequest
from .meta_event import MetaEvent
from .response import _object, _value


class PostType(str, Enum):
    """Top-level kinds of pushed event."""

    MESSAGE = "message"
    NOTICE = "notice"
    REQUEST = "request"
    META_EVENT = "meta_event"

    def __str__(self) -> str:
        return self.value


@dataclass
class StatusData:
    """The data block of a status reply."""

    group_id: int = 0
    user_id: int = 0
    message_id: int = 0
    forward_id: str = ""
    nickname: str = ""
    card: Any = None
    sex: str = ""
    age: int = 0
    area: str = ""
    join_time: int = 0
    last_sent_time: int = 0
    level: str = ""
    role: str = ""
    unfriendly: bool = False
    title: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> StatusData:
        p = _object(payload, "data")
        return cls(
            group_id=_value(p, "group_id", int, 0),
            user_id=_value(p, "user_id", int, 0),
            message_id=_value(p, "message_id", int, 0),
            forward_id=_value(p, "forward_id", str, ""),
            nickname=_value(p, "nickname", str, ""),
            card=p.get("card"),
            sex=_value(p, "sex", str, ""),
            age=_value(p, "age", int, 0),
            area=_value(p, "area", str, ""),
            join_time=_value(p, "join_time", int, 0),
            last_sent_time=_value(p, "last_sent_time", int, 0),
            level=_value(p, "level", str, ""),
            role=_value(p, "role", str, ""),
            unfriendly=_value(p, "unfriendly", bool, False),
            title=_value(p, "title", str, ""),
        )


@dataclass
class EventStatus:
    """A status reply carried over the websocket."""

    status: str = ""
    retcode: int = 0
    data: StatusData = field(default_factory=StatusData)
    echo: Any = None

    @classmethod
    def from_dict(cls, payload: Any) -> EventStatus:
        p = _object(payload, "status")
        return cls(
            status=_value(p, "status", str, ""),
            retcode=_value(p, "retcode", int, 0),
            data=StatusData.from_dict(p.get("data")),
            echo=p.get("echo"),
        )


@dataclass
class Event:
    """A decoded event; ``name`` is the key callbacks are registered under."""

    raw: bytes = b""
    time: int = 0
    self_id: int = 0
    post_type: str = ""
    current_qq: int = 0
    name: str = ""
    message: EventMessage = field(default_factory=EventMessage)
    notice: EventNotice = field(default_factory=EventNotice)
    request: EventRequest = field(default_factory=EventRequest)
    meta: MetaEvent = field(default_factory=MetaEvent)
    status: EventStatus = field(default_factory=EventStatus)


def parse_event(data: bytes | str) -> Event:
    """Decode one pushed event; raises ValueError if it is malformed."""
    raw = data.encode() if isinstance(data, str) else bytes(data)
    payload = _object(json.loads(raw), "event")
    event = Event(
        raw=raw,
        time=_value(payload, "time", int, 0),
        self_id=_value(payload, "self_id", int, 0),
        post_type=_value(payload, "post_type", str, ""),
        current_qq=_value(payload, "current_qq", int, 0),
    )
    if event.post_type == PostType.MESSAGE.value:
        event.message = EventMessage.from_dict(payload)
        event.name = event.message.message_type
    elif event.post_type == PostType.NOTICE.value:
        event.notice = EventNotice.from_dict(payload)
        event.name = event.notice.sub_type or str(event.notice.notice_type)
    elif event.post_type == PostType.REQUEST.value:
        event.request = EventRequest.from_dict(payload)
        event.name = event.request.sub_type or str(event.request.request_type)
    elif event.post_type == PostType.META_EVENT.value:
        event.meta = MetaEvent.from_dict(payload)
        event.name = str(event.meta.meta_event_type)
    if payload.get("status") == "ok":
        event.status = EventStatus.from_dict(payload)
    return event