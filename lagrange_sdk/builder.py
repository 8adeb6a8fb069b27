"""Fluent builder for calls to the bot's HTTP API."""

from __future__ import annotations

import inspect
import json as jsonlib
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from .constants import MessageType
from .markdown import MarkDown
from .response import Response, Status

logger = logging.getLogger(__name__)


class ApiName(str, Enum):
    """Actions understood by the bot's HTTP API."""

    GET_GROUP_MEMBER_INFO = "get_group_member_info"
    GET_LOGIN_INFO = "get_login_info"
    GET_MSG = "get_msg"
    GET_STRANGER_INFO = "get_stranger_info"
    SET_GROUP_KICK = "set_group_kick"
    SET_GROUP_BAN = "set_group_ban"
    SEND_GROUP_MSG = "send_group_msg"
    SEND_PRIVATE_MSG = "send_private_msg"
    SEND_GROUP_FORWARD_MSG = "send_group_forward_msg"
    GROUP_POKE = "group_poke"

    def __str__(self) -> str:
        return self.value


class ApiError(Exception):
    """Raised when the API answers with a status other than ``ok``."""


@dataclass
class MarkdownContent:
    """A markdown block carried inside a forward node."""

    type: str = ""
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type
        result["data"] = {"content": self.content} if self.content else {}
        return result


@dataclass
class SegmentData:
    text: str = ""
    file: str = ""
    data: str = ""
    url: str = ""
    qq: str = ""
    id: str = ""
    name: str = ""
    uin: str = ""
    content: list[MarkdownContent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            key: value
            for key, value in (
                ("text", self.text),
                ("file", self.file),
                ("data", self.data),
                ("url", self.url),
                ("qq", self.qq),
                ("id", self.id),
                ("name", self.name),
                ("uin", self.uin),
            )
            if value
        }
        if self.content:
            result["content"] = [item.to_dict() for item in self.content]
        return result


@dataclass
class MessageSegment:
    type: str = ""
    data: SegmentData = field(default_factory=SegmentData)

    def to_dict(self) -> dict[str, Any]:
        return {"type": str(self.type), "data": self.data.to_dict()}


@dataclass
class Params:
    """Request parameters; empty values are left out of the body."""

    group_id: int = 0
    user_id: int = 0
    message_id: int = 0
    message: list[MessageSegment] = field(default_factory=list)
    messages: list[MessageSegment] = field(default_factory=list)
    duration: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.group_id:
            result["group_id"] = self.group_id
        if self.user_id:
            result["user_id"] = self.user_id
        if self.message_id:
            result["message_id"] = self.message_id
        if self.message:
            result["message"] = [seg.to_dict() for seg in self.message]
        if self.messages:
            result["messages"] = [seg.to_dict() for seg in self.messages]
        if self.duration:
            result["duration"] = self.duration
        return result


@dataclass
class LoginInfo:
    user_id: int = 0
    nickname: str = ""


@dataclass
class StrangerInfo:
    user_id: int = 0
    nickname: str = ""
    sex: str = ""
    age: int = 0


@dataclass
class MsgSender:
    user_id: int = 0
    nickname: str = ""
    sex: str = ""


@dataclass
class MsgInfo:
    time: int = 0
    message_type: str = ""
    message_id: int = 0
    real_id: int = 0
    sender: MsgSender = field(default_factory=MsgSender)
    data: list[MessageSegment] = field(default_factory=list)


def _join_url(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")


class Builder:
    """Collects one API call's action and parameters, then sends it."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None) -> None:
        self.url = url
        self.client = client
        self.path: str | None = None
        self.method = "POST"
        self.action: ApiName | None = None
        self.params = Params()

    # -- sending -------------------------------------------------------

    def build_body(self) -> str:
        """Return the JSON request body."""
        return jsonlib.dumps(self.params.to_dict(), ensure_ascii=False)

    def _target(self) -> str:
        if self.path is not None:
            return _join_url(self.url, self.path)
        return _join_url(self.url, str(self.action) if self.action else "")

    async def do_and_response(self) -> Response:
        """Send the call and return the reply; raises ApiError unless it is ok."""
        body = self.build_body()
        logger.debug("request body=%s", body)
        headers = {"Content-Type": "application/json"}
        target = self._target()
        if self.client is not None:
            reply = await self.client.request(
                self.method, target, content=body.encode(), headers=headers
            )
        else:
            async with httpx.AsyncClient() as client:
                reply = await client.request(
                    self.method, target, content=body.encode(), headers=headers
                )
        response = Response(reply.content)
        if not response.ok():
            raise ApiError(response.status_msg())
        return response

    async def do(self) -> None:
        """Send the call, discarding the reply."""
        await self.do_and_response()

    async def do_with_callback(self, callback: Callable[[Response], Any]) -> None:
        """Send the call and hand the reply to ``callback``."""
        response = await self.do_and_response()
        result = callback(response)
        if inspect.isawaitable(result):
            await result

    async def do_response(self) -> Status:
        """Send the call and return the decoded reply."""
        response = await self.do_and_response()
        logger.debug("%s", response.origin.decode(errors="replace"))
        return response.parse()

    # -- messages ------------------------------------------------------

    def _segment(self, kind: MessageType, **data: Any) -> Builder:
        self.params.message.append(MessageSegment(type=kind.value, data=SegmentData(**data)))
        return self

    def send_reply(self, msg_id: int) -> Builder:
        """Make the message a reply to ``msg_id``."""
        return self._segment(MessageType.REPLY, id=str(msg_id))

    def send_group_msg(self, group_id: int) -> Builder:
        self.action = ApiName.SEND_GROUP_MSG
        self.params.group_id = group_id
        return self

    def send_private_msg(self, user_id: int) -> Builder:
        self.action = ApiName.SEND_PRIVATE_MSG
        self.params.user_id = user_id
        return self

    def message_data(self, data: Iterable[MessageSegment]) -> Builder:
        """Replace the message with hand-built segments."""
        self.params.message = list(data)
        return self

    def text(self, text: str) -> Builder:
        return self._segment(MessageType.TEXT, text=text)

    def json(self, data: str) -> Builder:
        return self._segment(MessageType.JSON, data=data)

    def face(self, face_id: int) -> Builder:
        return self._segment(MessageType.FACE, id=str(face_id))

    def image(self, img: str) -> Builder:
        return self._segment(MessageType.IMAGE, file=img)

    def image_base64(self, img_base64: str) -> Builder:
        return self._segment(MessageType.IMAGE, file="base64://" + img_base64)

    def long_msg(self, msg_id: str) -> Builder:
        return self._segment(MessageType.LONGMSG, id=msg_id)

    async def do_msg_id(self) -> int:
        """Send the message and return its id."""
        return (await self.do_response()).data.message_id

    # -- queries -------------------------------------------------------

    def get_group_member_info(self) -> Builder:
        return self

    def to_group_and_user(self, group_id: int, user_id: int) -> Builder:
        self.action = ApiName.GET_GROUP_MEMBER_INFO
        self.params.group_id = group_id
        self.params.user_id = user_id
        return self

    async def get_login_info(self) -> LoginInfo:
        """Return the bot's login info, or an empty one if the call fails."""
        self.action = ApiName.GET_LOGIN_INFO
        try:
            status = await self.do_response()
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.error("get_login_info failed: %s", exc)
            return LoginInfo()
        return LoginInfo(user_id=status.data.user_id, nickname=status.data.nickname)

    async def get_msg(self, msg_id: int) -> MsgInfo:
        """Return a stored message, or an empty one if the call fails."""
        self.action = ApiName.GET_MSG
        self.params.message_id = msg_id
        try:
            status = await self.do_response()
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.error("get_msg failed: %s", exc)
            return MsgInfo()
        data = status.data
        segments = [
            MessageSegment(
                type=seg.type,
                data=SegmentData(
                    file=seg.file, text=seg.text, data=seg.data, url=seg.url, qq=seg.qq, id=seg.id
                ),
            )
            for seg in data.message
        ]
        return MsgInfo(
            time=data.time,
            message_type=data.message_type,
            message_id=data.message_id,
            real_id=data.real_id,
            sender=MsgSender(user_id=data.sender.user_id, nickname=data.nickname, sex=data.sex),
            data=segments,
        )

    async def get_stranger_info(self, user_id: int) -> StrangerInfo:
        """Return a user's public info, or an empty one if the call fails."""
        self.action = ApiName.GET_STRANGER_INFO
        self.params.user_id = user_id
        try:
            status = await self.do_response()
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.error("get_stranger_info failed: %s", exc)
            return StrangerInfo()
        data = status.data
        return StrangerInfo(
            user_id=data.user_id, nickname=data.nickname, sex=data.sex, age=data.age
        )

    # -- group management ----------------------------------------------

    def set_group_ban(self) -> Builder:
        return self

    def to_group_and_mute_user(self, group_id: int, user_id: int) -> Builder:
        self.action = ApiName.SET_GROUP_BAN
        self.params.group_id = group_id
        self.params.user_id = user_id
        return self

    def duration(self, seconds: int) -> Builder:
        self.params.duration = seconds
        return self

    def set_group_kick(self) -> Builder:
        return self

    def to_group_and_kick_user(self, group_id: int, user_id: int) -> Builder:
        self.action = ApiName.SET_GROUP_KICK
        self.params.group_id = group_id
        self.params.user_id = user_id
        return self

    def poke(self) -> Builder:
        return self

    def set_group_poke(self, group_id: int, user_id: int) -> Builder:
        self.action = ApiName.GROUP_POKE
        self.params.group_id = group_id
        self.params.user_id = user_id
        return self

    # -- forwarded markdown --------------------------------------------

    def markdown_build(self, name: str, uin: int) -> Builder:
        """Start a forward message with a node sent as ``name``/``uin``."""
        self.action = ApiName.SEND_GROUP_FORWARD_MSG
        self.params.messages.append(
            MessageSegment(
                type=MessageType.NODE.value, data=SegmentData(name=name, uin=str(uin))
            )
        )
        return self

    def set_markdown(self, markdown: MarkDown | str) -> Builder:
        """Add the markdown text to every forward node."""
        text = str(markdown)
        for node in self.params.messages:
            node.data.content.append(
                MarkdownContent(type=MessageType.MARKDOWN.value, content=text)
            )
        return self

    async def do_forward_id(self) -> str:
        """Send the forward message and return its forward id."""
        return (await self.do_response()).data.forward_id


def api(url: str) -> Builder:
    """Start a new API call against the bot at ``url``."""
    return Builder(url)