"""Client for a second pixiv image API that takes a keyword form."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .builder import ApiError, api
from .constants import BOT_URL, ERR_CMD_PIX_TAG_NOT_FOUND
from .http_client import form_request
from .response import _object, _value

logger = logging.getLogger(__name__)

PIXIV_URL2 = "https://image.anosu.top/pixiv/json"


class PixivNotFoundError(Exception):
    """Raised when no image matches the keyword."""

    def __init__(self, keyword: str) -> None:
        super().__init__(ERR_CMD_PIX_TAG_NOT_FOUND + keyword)
        self.keyword = keyword


@dataclass
class PixivImageData:
    pid: int = 0
    page: int = 0
    uid: int = 0
    title: str = ""
    user: str = ""
    r18: int = 0
    width: int = 0
    height: int = 0
    tags: list[str] = field(default_factory=list)
    url: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> PixivImageData:
        p = _object(payload, "image")
        tags = p.get("tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError(f"field 'tags' must be a list of strings, got {tags!r}")
        return cls(
            pid=_value(p, "pid", int, 0),
            page=_value(p, "page", int, 0),
            uid=_value(p, "uid", int, 0),
            title=_value(p, "title", str, ""),
            user=_value(p, "user", str, ""),
            r18=_value(p, "r18", int, 0),
            width=_value(p, "width", int, 0),
            height=_value(p, "height", int, 0),
            tags=list(tags),
            url=_value(p, "url", str, ""),
        )


async def get_pixiv_image(
    client: httpx.AsyncClient, form: Mapping[str, Any]
) -> list[PixivImageData]:
    """Post ``form`` to the image API and return the images it lists."""
    response = await client.send(form_request(PIXIV_URL2, form))
    payload = json.loads(response.content)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"expected a list of images, got {payload!r}")
    return [PixivImageData.from_dict(item) for item in payload]


async def get_pixiv_pid_title_url(
    client: httpx.AsyncClient, group_id: int, keyword: str, r18: int
) -> tuple[int, str, str]:
    """Return ``(pid, title, url)`` of the first match.

    When nothing matches, the group is told so and PixivNotFoundError is raised.
    """
    images = await get_pixiv_image(client, {"keyword": keyword, "r18": str(r18)})
    if not images:
        try:
            await api(BOT_URL).send_group_msg(group_id).text(
                ERR_CMD_PIX_TAG_NOT_FOUND + keyword
            ).do()
        except (ApiError, httpx.HTTPError) as exc:
            logger.error("failed to notify group %s: %s", group_id, exc)
        raise PixivNotFoundError(keyword)
    first = images[0]
    logger.debug("resp: %s", first)
    return first.pid, first.title, first.url