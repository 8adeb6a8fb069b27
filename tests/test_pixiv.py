import base64

import httpx
import pytest
import respx

from lagrange_sdk.http_client import HTTPStatusError
from lagrange_sdk.pixiv import (
    DEFAULT_TAG,
    PixivImage,
    PixivQuery,
    PixivResponse,
    PixivUrls,
    fetch_pixiv,
    modify_pixiv_image_url,
)

API = "https://api.example.com/setu"

SAMPLE = {
    "error": "",
    "data": [
        {
            "pid": 111,
            "p": 0,
            "uid": 222,
            "title": "sample",
            "author": "artist",
            "r18": False,
            "width": 800,
            "height": 600,
            "tags": ["a", "b"],
            "ext": "jpg",
            "aiType": 1,
            "uploadDate": 1700000000,
            "urls": {"regular": "https://img.example.com/x.jpg"},
        }
    ],
}


def test_modify_url_replaces_master_and_inserts_size():
    url = "https://i.pximg.net/img-master/img/2020/01/01/12345_p0_master1200.jpg"
    result = modify_pixiv_image_url(url)
    assert result == (
        "https://i.pximg.net/c/250x250_80_a2/img-master/img/2020/01/01/"
        "12345_p0_square1200.jpg"
    )


def test_modify_url_without_master_keeps_names():
    result = modify_pixiv_image_url("https://a.example.com/b/x.jpg")
    parts = result.split("/")
    assert parts[3] == "c"
    assert parts[4] == "250x250_80_a2"
    assert parts[5:] == ["b", "x.jpg"]


def test_modify_url_too_short():
    with pytest.raises(ValueError):
        modify_pixiv_image_url("x")


def test_query_defaults_and_setters():
    query = PixivQuery()
    assert (query.size, query.tag) == ("", "")
    assert query.set_defaults() is query
    assert query.size == "regular"
    assert query.tag == DEFAULT_TAG
    query.set_size("original").set_tag("a b")
    assert query.size == "original"
    assert query.tag == "a+b"


def test_set_tag_escapes_to_default_form():
    assert PixivQuery().set_tag("明日方舟").tag == DEFAULT_TAG


def test_response_from_dict():
    response = PixivResponse.from_dict(SAMPLE)
    assert response.error == ""
    assert len(response.data) == 1
    image = response.data[0]
    assert image.pid == 111
    assert image.ai_type == 1
    assert image.upload_date == 1700000000
    assert image.tags == ["a", "b"]
    assert image.urls.size == "https://img.example.com/x.jpg"


def test_from_dict_rejects_bad_types():
    with pytest.raises(ValueError):
        PixivResponse.from_dict({"data": "nope"})
    with pytest.raises(ValueError):
        PixivImage.from_dict({"tags": [1, 2]})
    assert PixivUrls.from_dict(None).regular == ""


def test_fetch_pixiv_sends_query_and_parses():
    with respx.mock:
        route = respx.get(API).mock(return_value=httpx.Response(200, json=SAMPLE))
        result = fetch_pixiv(API, PixivQuery().set_defaults())
        params = route.calls.last.request.url.params
    assert params["size"] == "regular"
    assert params["tag"] == "明日方舟"
    assert result.data[0].title == "sample"


def test_fetch_pixiv_raises_on_http_error():
    with respx.mock:
        respx.get(API).mock(return_value=httpx.Response(500, text="boom"))
        with pytest.raises(HTTPStatusError):
            fetch_pixiv(API, PixivQuery().set_defaults())


def test_fetch_pixiv_raises_on_bad_json():
    with respx.mock:
        respx.get(API).mock(return_value=httpx.Response(200, text="not json"))
        with pytest.raises(ValueError):
            fetch_pixiv(API, PixivQuery())


def test_url_to_base64_round_trip():
    with respx.mock:
        respx.get("https://img.example.com/x.jpg").mock(
            return_value=httpx.Response(200, content=b"\x00\x01image")
        )
        encoded = PixivImage().url_to_base64("https://img.example.com/x.jpg")
    assert base64.b64decode(encoded) == b"\x00\x01image"


def test_url_to_base64_failure_gives_empty():
    with respx.mock:
        respx.get("https://img.example.com/x.jpg").mock(return_value=httpx.Response(404))
        assert PixivImage().url_to_base64("https://img.example.com/x.jpg") == ""