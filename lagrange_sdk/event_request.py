"""Request events: friend requests and group join requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .response import _object, _value


class RequestType(str, Enum):
    """Kinds of request the backend reports."""

    FRIEND = "friend"
    GROUP = "group"

    def __str__(self) -> str:
        return self.value


EVENT_FRIEND_REQUEST = "friend"
EVENT_GROUP_REQUEST = "group"
EVENT_ADD = "add"


def _request_type(value: str) -> RequestType | str:
    try:
        return RequestType(value)
    except ValueError:
        return value


@dataclass
class EventRequest:
    """A request waiting for the bot's answer; ``flag`` identifies it."""

    time: int = 0
    self_id: int = 0
    post_type: str = ""
    request_type: RequestType | str = ""
    sub_type: str = ""
    group_id: int = 0
    user_id: int = 0
    comment: str = ""
    flag: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> EventRequest:
        p = _object(payload, "request event")
        return cls(
            time=_value(p, "time", int, 0),
            self_id=_value(p, "self_id", int, 0),
            post_type=_value(p, "post_type", str, ""),
            request_type=_request_type(_value(p, "request_type", str, "")),
            sub_type=_value(p, "sub_type", str, ""),
            group_id=_value(p, "group_id", int, 0),
            user_id=_value(p, "user_id", int, 0),
            comment=_value(p, "comment", str, ""),
            flag=_value(p, "flag", str, ""),
        )