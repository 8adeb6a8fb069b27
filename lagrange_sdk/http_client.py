"""A small HTTP client with shared headers, and request constructors."""

from __future__ import annotations

import json as jsonlib
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx


class HTTPStatusError(Exception):
    """Raised when a server answers with a status of 400 or above."""

    def __init__(self, status_code: int, body: bytes, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _encode_form(form: Mapping[str, Any] | None) -> str:
    if not form:
        return ""
    return urlencode(sorted(form.items()), doseq=True)


def json_request(target_url: str, json_data: bytes | str) -> httpx.Request:
    """Build a POST request carrying a JSON body."""
    content = json_data.encode() if isinstance(json_data, str) else bytes(json_data)
    return httpx.Request(
        "POST", target_url, content=content, headers={"Content-Type": "application/json"}
    )


def form_request(target_url: str, form: Mapping[str, Any]) -> httpx.Request:
    """Build a POST request carrying a URL-encoded form."""
    return httpx.Request(
        "POST",
        target_url,
        content=_encode_form(form).encode(),
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )


class HTTPClient:
    """Sends requests relative to ``base_url`` with a common set of headers."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.headers = httpx.Headers()

    def add_header(self, key: str, value: str) -> None:
        """Set a header sent with every request."""
        self.headers[key] = value

    def _send(self, request: httpx.Request, what: str) -> bytes:
        with httpx.Client(timeout=self.timeout) as client:
            response = client.send(request)
        body = response.content
        if response.status_code >= 400:
            raise HTTPStatusError(
                response.status_code,
                body,
                f"{what} failed with status code {response.status_code}",
            )
        return body

    def get(self, path: str = "", query: Mapping[str, Any] | None = None) -> bytes:
        """GET ``base_url + path`` with an optional query; returns the body."""
        url = self.base_url + path
        encoded = _encode_form(query)
        if encoded:
            url += "?" + encoded
        request = httpx.Request("GET", url, headers=self.headers)
        return self._send(request, "HTTP request")

    def post_json(self, path: str, data: Any) -> bytes:
        """POST ``data`` as JSON; returns the body."""
        body = jsonlib.dumps(data, ensure_ascii=False, separators=(",", ":")).encode()
        request = json_request(self.base_url + path, body)
        request.headers.update(self.headers)
        return self._send(request, "HTTP POST request")

    def post_form(self, path: str, data: Mapping[str, Any]) -> bytes:
        """POST ``data`` as a URL-encoded form; returns the body."""
        request = form_request(self.base_url + path, data)
        request.headers.update(self.headers)
        return self._send(request, "HTTP POST request")