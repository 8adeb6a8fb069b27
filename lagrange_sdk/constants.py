"""Message segment types and default bot settings."""

from __future__ import annotations

from enum import Enum


class MessageType(str, Enum):
    """Segment types understood by the bot backend."""

    TEXT = "text"
    AT = "at"
    IMAGE = "image"
    JSON = "json"
    REPLY = "reply"
    FACE = "face"
    NODE = "node"
    MARKDOWN = "markdown"
    LONGMSG = "longmsg"

    def __str__(self) -> str:
        return self.value


BOT_WS = "ws://127.0.0.1:3001"
BOT_URL = "http://127.0.0.1:3000"
BOT_ID_STR = "10000"
BOT_ID = 10000

ERR_CMD_PIX_TAG_NOT_FOUND = "未找到相关pixiv图片,tag:"
ERR_CMD_PIX_404 = "图片无法访问，请重试,tag"

ADMIN_LIST: tuple[int, ...] = (10001,)