"""Responses returned by the bot's HTTP API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _value(payload: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Fetch a typed field; missing or null gives the default, a wrong type raises."""
    value = payload.get(key)
    if value is None:
        return default
    if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError(f"field {key!r} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be {kind.__name__}, got {value!r}")
    return value


def _object(payload: Any, what: str) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"{what} must be an object, got {payload!r}")
    return payload


@dataclass
class ResponseSender:
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
    def from_dict(cls, payload: Any) -> ResponseSender:
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
class ResponseSegment:
    """One message segment; its data fields are kept flat."""

    type: str = ""
    text: str = ""
    file: str = ""
    url: str = ""
    data: str = ""
    qq: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> ResponseSegment:
        p = _object(payload, "segment")
        inner = p.get("data", p.get("Data"))
        d = _object(inner, "segment data")
        return cls(
            type=_value(p, "type", str, ""),
            text=_value(d, "text", str, ""),
            file=_value(d, "file", str, ""),
            url=_value(d, "url", str, ""),
            data=_value(d, "data", str, ""),
            qq=_value(d, "qq", str, ""),
            id=_value(d, "id", str, ""),
        )


@dataclass
class ResponseData:
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
    time: int = 0
    message_type: str = ""
    real_id: int = 0
    sender: ResponseSender = field(default_factory=ResponseSender)
    message: list[ResponseSegment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> ResponseData:
        p = _object(payload, "data")
        segments = p.get("message")
        if segments is None:
            segments = []
        if not isinstance(segments, list):
            raise ValueError(f"field 'message' must be a list, got {segments!r}")
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
            time=_value(p, "time", int, 0),
            message_type=_value(p, "message_type", str, ""),
            real_id=_value(p, "real_id", int, 0),
            sender=ResponseSender.from_dict(p.get("sender")),
            message=[ResponseSegment.from_dict(s) for s in segments],
        )


@dataclass
class Status:
    status: str = ""
    retcode: int = 0
    data: ResponseData = field(default_factory=ResponseData)
    data_interface: str | None = None
    """Raw JSON text of the ``dataInterface`` field, or None when it is absent."""
    echo: Any = None

    @classmethod
    def from_dict(cls, payload: Any) -> Status:
        p = _object(payload, "response")
        raw = json.dumps(p["dataInterface"]) if "dataInterface" in p else None
        return cls(
            status=_value(p, "status", str, ""),
            retcode=_value(p, "retcode", int, 0),
            data=ResponseData.from_dict(p.get("data")),
            data_interface=raw,
            echo=p.get("echo"),
        )


class Response:
    """A raw API reply, decoded on first use."""

    def __init__(self, origin: bytes | str) -> None:
        self.origin = origin.encode() if isinstance(origin, str) else bytes(origin)
        self._status: Status | None = None

    def parse(self) -> Status:
        """Decode the reply; raises ValueError if it is not a valid response."""
        if self._status is None:
            if not self.origin.strip():
                raise ValueError("empty response")
            self._status = Status.from_dict(json.loads(self.origin))
        return self._status

    def get_data(self) -> Any:
        """Return the decoded ``dataInterface`` payload."""
        raw = self.parse().data_interface
        if raw is None:
            raise ValueError("response has no dataInterface")
        return json.loads(raw)

    def ok(self) -> bool:
        try:
            return self.parse().status == "ok"
        except ValueError:
            return False

    def status_msg(self) -> str:
        try:
            return self.parse().status
        except ValueError:
            return ""

    def result(self) -> tuple[str, int]:
        try:
            status = self.parse()
        except ValueError:
            return "", 0
        return status.status, status.retcode

    def group_message_response(self) -> Response:
        """Wrap the ``dataInterface`` payload as a response of its own."""
        raw = self.parse().data_interface
        if raw is None:
            raise ValueError("response has no dataInterface")
        return Response(raw)