"""Notice events: uploads, membership changes, bans, recalls and pokes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .response import _object, _value


class NoticeType(str, Enum):
    """Kinds of notice the backend reports."""

    GROUP_UPLOAD = "group_upload"
    GROUP_ADMIN = "group_admin"
    GROUP_DECREASE = "group_decrease"
    GROUP_INCREASE = "group_increase"
    GROUP_BAN = "group_ban"
    FRIEND_ADD = "friend_add"
    GROUP_RECALL = "group_recall"
    FRIEND_RECALL = "friend_recall"
    NOTIFY = "notify"  # poke, lucky king, honour changes

    def __str__(self) -> str:
        return self.value


# Event names under which notices are dispatched: the sub type, or the
# notice type when the sub type is empty.
EVENT_GROUP_RECALL = "group_recall"
EVENT_FRIEND_RECALL = "friend_recall"
GROUP_UPLOAD = "group_upload"
GROUP_NOTIFY = "notify"
FRIEND_ADD = "friend_add"
EVENT_SET_ADMIN = "set"
EVENT_UNSET_ADMIN = "unset"
EVENT_LEAVE = "leave"
EVENT_KICK = "kick"
EVENT_KICK_ME = "kick_me"
EVENT_INVITE = "invite"
EVENT_APPROVE = "approve"
EVENT_BAN = "ban"
EVENT_LIFT_BAN = "lift_ban"
EVENT_POKE = "poke"
EVENT_LUCKY_KING = "lucky_king"
EVENT_HONOR = "honor"


def _notice_type(value: str) -> NoticeType | str:
    try:
        return NoticeType(value)
    except ValueError:
        return value


@dataclass
class File:
    """A file uploaded to a group."""

    id: str = ""
    name: str = ""
    size: int = 0
    busid: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> File:
        p = _object(payload, "file")
        return cls(
            id=_value(p, "id", str, ""),
            name=_value(p, "name", str, ""),
            size=_value(p, "size", int, 0),
            busid=_value(p, "busid", int, 0),
        )


@dataclass
class EventNotice:
    """A notice event; which fields matter depends on ``notice_type``."""

    time: int = 0
    self_id: int = 0
    post_type: str = ""
    notice_type: NoticeType | str = ""
    sub_type: str = ""
    honor_type: str = ""
    group_id: int = 0
    message_id: int = 0
    operator_id: int = 0
    user_id: int = 0
    file: File = field(default_factory=File)
    duration: int = 0
    target_id: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> EventNotice:
        p = _object(payload, "notice event")
        return cls(
            time=_value(p, "time", int, 0),
            self_id=_value(p, "self_id", int, 0),
            post_type=_value(p, "post_type", str, ""),
            notice_type=_notice_type(_value(p, "notice_type", str, "")),
            sub_type=_value(p, "sub_type", str, ""),
            honor_type=_value(p, "honor_type", str, ""),
            group_id=_value(p, "group_id", int, 0),
            message_id=_value(p, "message_id", int, 0),
            operator_id=_value(p, "operator_id", int, 0),
            user_id=_value(p, "user_id", int, 0),
            file=File.from_dict(p.get("file")),
            duration=_value(p, "duration", int, 0),
            target_id=_value(p, "target_id", int, 0),
        )