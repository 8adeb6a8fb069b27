"""Client for a random pixiv illustration API."""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote_plus

import httpx

from .http_client import HTTPClient, HTTPStatusError
from .response import _object, _value

logger = logging.getLogger(__name__)

PIXIV_URL = "https://api.lolicon.app/setu/v2"
DEFAULT_SIZE = "regular"
DEFAULT_TAG = "%E6%98%8E%E6%97%A5%E6%96%B9%E8%88%9F"


def _str_list(payload: dict[str, Any], key: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field {key!r} must be a list of strings, got {value!r}")
    return list(value)


@dataclass
class PixivUrls:
    regular: str = ""

    @property
    def size(self) -> str:
        """The URL of the requested size."""
        return self.regular

    @classmethod
    def from_dict(cls, payload: Any) -> PixivUrls:
        p = _object(payload, "urls")
        return cls(regular=_value(p, "regular", str, ""))


@dataclass
class PixivImage:
    pid: int = 0
    p: int = 0
    uid: int = 0
    title: str = ""
    author: str = ""
    r18: bool = False
    width: int = 0
    height: int = 0
    tags: list[str] = field(default_factory=list)
    ext: str = ""
    ai_type: int = 0
    upload_date: int = 0
    urls: PixivUrls = field(default_factory=PixivUrls)

    @classmethod
    def from_dict(cls, payload: Any) -> PixivImage:
        p = _object(payload, "image")
        return cls(
            pid=_value(p, "pid", int, 0),
            p=_value(p, "p", int, 0),
            uid=_value(p, "uid", int, 0),
            title=_value(p, "title", str, ""),
            author=_value(p, "author", str, ""),
            r18=_value(p, "r18", bool, False),
            width=_value(p, "width", int, 0),
            height=_value(p, "height", int, 0),
            tags=_str_list(p, "tags"),
            ext=_value(p, "ext", str, ""),
            ai_type=_value(p, "aiType", int, 0),
            upload_date=_value(p, "uploadDate", int, 0),
            urls=PixivUrls.from_dict(p.get("urls")),
        )

    def url_to_base64(self, url: str) -> str:
        """Download ``url`` and return it base64-encoded, or "" if the download fails."""
        try:
            body = HTTPClient(url).get("")
        except (httpx.HTTPError, HTTPStatusError) as exc:
            logger.error("%s", exc)
            return ""
        return base64.b64encode(body).decode("ascii")


@dataclass
class PixivResponse:
    error: str = ""
    data: list[PixivImage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> PixivResponse:
        p = _object(payload, "pixiv response")
        items = p.get("data")
        if items is None:
            items = []
        if not isinstance(items, list):
            raise ValueError(f"field 'data' must be a list, got {items!r}")
        return cls(
            error=_value(p, "error", str, ""),
            data=[PixivImage.from_dict(item) for item in items],
        )


@dataclass
class PixivQuery:
    """Query parameters; the tag is stored already URL-escaped."""

    size: str = ""
    tag: str = ""

    def set_defaults(self) -> PixivQuery:
        self.size = DEFAULT_SIZE
        self.tag = DEFAULT_TAG
        return self

    def set_size(self, size: str) -> PixivQuery:
        self.size = size
        return self

    def set_tag(self, tag: str) -> PixivQuery:
        self.tag = quote_plus(tag)
        return self


def modify_pixiv_image_url(original_url: str) -> str:
    """Turn an image URL into its 250x250 square thumbnail URL."""
    parts = original_url.split("/")
    for index, part in enumerate(parts):
        if "_master" in part:
            parts[index] = part.replace("_master", "_square", 1)
            break
    if len(parts) < 3:
        raise ValueError(f"URL has too few path parts: {original_url!r}")
    parts.insert(3, "c")
    parts.insert(4, "250x250_80_a2")
    return "/".join(parts)


def fetch_pixiv(url: str, query: PixivQuery) -> PixivResponse:
    """Ask the API at ``url`` for images matching ``query``."""
    target = f"{url}?size={query.size}&tag={query.tag}"
    try:
        body = HTTPClient(target).get("")
        return PixivResponse.from_dict(json.loads(body))
    except (httpx.HTTPError, HTTPStatusError, ValueError) as exc:
        logger.error("%s", exc)
        raise