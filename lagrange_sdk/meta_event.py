"""Meta events: lifecycle changes and heartbeats."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .response import _object, _value


class MetaEventType(str, Enum):
    LIFECYCLE = "lifecycle"
    HEARTBEAT = "heartbeat"

    def __str__(self) -> str:
        return self.value


def _meta_type(value: str) -> MetaEventType | str:
    try:
        return MetaEventType(value)
    except ValueError:
        return value


@dataclass
class MetaEvent:
    """A lifecycle or heartbeat event; ``interval`` is in milliseconds."""

    time: int = 0
    self_id: int = 0
    post_type: str = ""
    meta_event_type: MetaEventType | str = ""
    sub_type: str = ""
    status: Any = None
    interval: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> MetaEvent:
        p = _object(payload, "meta event")
        return cls(
            time=_value(p, "time", int, 0),
            self_id=_value(p, "self_id", int, 0),
            post_type=_value(p, "post_type", str, ""),
            meta_event_type=_meta_type(_value(p, "meta_event_type", str, "")),
            sub_type=_value(p, "sub_type", str, ""),
            status=p.get("status"),
            interval=_value(p, "interval", int, 0),
        )