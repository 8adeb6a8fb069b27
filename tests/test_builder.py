import json

import httpx
import pytest
import respx

from lagrange_sdk.builder import (
    ApiError,
    ApiName,
    Builder,
    MessageSegment,
    SegmentData,
    api,
)
from lagrange_sdk.markdown import MarkDown

BASE = "http://bot.test"


def test_text_message_body():
    b = api(BASE).send_group_msg(123).text("hi")
    body = json.loads(b.build_body())
    assert body == {"group_id": 123, "message": [{"type": "text", "data": {"text": "hi"}}]}
    assert b.action is ApiName.SEND_GROUP_MSG


def test_reply_then_private_message():
    b = api(BASE).send_reply(77).send_private_msg(5).face(14)
    body = json.loads(b.build_body())
    assert body["user_id"] == 5
    assert body["message"] == [
        {"type": "reply", "data": {"id": "77"}},
        {"type": "face", "data": {"id": "14"}},
    ]


def test_image_base64_prefix():
    b = api(BASE).send_group_msg(1).image_base64("QUJD")
    assert b.params.message[0].data.file == "base64://QUJD"
    assert b.params.message[0].type == "image"


def test_json_long_msg_and_image():
    b = api(BASE).send_group_msg(1).json("{}").long_msg("abc").image("file.png")
    kinds = [seg.type for seg in b.params.message]
    assert kinds == ["json", "longmsg", "image"]
    assert b.params.message[0].data.data == "{}"
    assert b.params.message[1].data.id == "abc"


def test_message_data_replaces():
    seg = MessageSegment(type="text", data=SegmentData(text="x"))
    b = api(BASE).text("old").message_data([seg])
    assert b.params.message == [seg]


def test_ban_kick_poke_params():
    ban = api(BASE).set_group_ban().to_group_and_mute_user(10, 20).duration(60)
    assert json.loads(ban.build_body()) == {"group_id": 10, "user_id": 20, "duration": 60}
    assert ban.action is ApiName.SET_GROUP_BAN
    kick = api(BASE).set_group_kick().to_group_and_kick_user(10, 20)
    assert kick.action is ApiName.SET_GROUP_KICK
    poke = api(BASE).poke().set_group_poke(10, 20)
    assert poke.action is ApiName.GROUP_POKE
    info = api(BASE).get_group_member_info().to_group_and_user(10, 20)
    assert info.action is ApiName.GET_GROUP_MEMBER_INFO


def test_markdown_forward_body():
    md = MarkDown().text("hello")
    b = api(BASE).markdown_build("bot", 42).set_markdown(md)
    body = json.loads(b.build_body())
    assert body["messages"] == [
        {
            "type": "node",
            "data": {
                "name": "bot",
                "uin": "42",
                "content": [{"type": "markdown", "data": {"content": "hello"}}],
            },
        }
    ]
    assert b.action is ApiName.SEND_GROUP_FORWARD_MSG


def test_empty_body():
    assert json.loads(Builder(BASE).build_body()) == {}


@pytest.mark.asyncio
async def test_do_msg_id_posts_to_action():
    with respx.mock(base_url=BASE) as mock:
        route = mock.post("/send_group_msg").mock(
            return_value=httpx.Response(
                200, json={"status": "ok", "retcode": 0, "data": {"message_id": 42}}
            )
        )
        msg_id = await api(BASE).send_group_msg(9).text("hi").do_msg_id()
    assert msg_id == 42
    request = route.calls.last.request
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content)["group_id"] == 9


@pytest.mark.asyncio
async def test_failed_status_raises():
    with respx.mock(base_url=BASE) as mock:
        mock.post("/send_group_msg").mock(
            return_value=httpx.Response(200, json={"status": "failed", "retcode": 1})
        )
        with pytest.raises(ApiError, match="failed"):
            await api(BASE).send_group_msg(9).text("hi").do()


@pytest.mark.asyncio
async def test_invalid_reply_raises():
    with respx.mock(base_url=BASE) as mock:
        mock.post("/group_poke").mock(return_value=httpx.Response(200, content=b"nope"))
        with pytest.raises(ApiError):
            await api(BASE).poke().set_group_poke(1, 2).do()


@pytest.mark.asyncio
async def test_do_with_callback_receives_response():
    seen = []
    with respx.mock(base_url=BASE) as mock:
        mock.post("/set_group_ban").mock(
            return_value=httpx.Response(200, json={"status": "ok", "retcode": 0})
        )
        await api(BASE).set_group_ban().to_group_and_mute_user(1, 2).do_with_callback(seen.append)
    assert len(seen) == 1
    assert seen[0].ok()


@pytest.mark.asyncio
async def test_get_login_info():
    with respx.mock(base_url=BASE) as mock:
        mock.post("/get_login_info").mock(
            return_value=httpx.Response(
                200, json={"status": "ok", "data": {"user_id": 555, "nickname": "bot"}}
            )
        )
        info = await api(BASE).get_login_info()
    assert (info.user_id, info.nickname) == (555, "bot")


@pytest.mark.asyncio
async def test_get_login_info_failure_is_empty():
    with respx.mock(base_url=BASE) as mock:
        mock.post("/get_login_info").mock(
            return_value=httpx.Response(200, json={"status": "failed"})
        )
        info = await api(BASE).get_login_info()
    assert (info.user_id, info.nickname) == (0, "")


@pytest.mark.asyncio
async def test_get_stranger_info():
    payload = {"status": "ok", "data": {"user_id": 8, "nickname": "n", "sex": "male", "age": 20}}
    with respx.mock(base_url=BASE) as mock:
        route = mock.post("/get_stranger_info").mock(return_value=httpx.Response(200, json=payload))
        info = await api(BASE).get_stranger_info(8)
    assert (info.user_id, info.nickname, info.sex, info.age) == (8, "n", "male", 20)
    assert json.loads(route.calls.last.request.content) == {"user_id": 8}


@pytest.mark.asyncio
async def test_get_msg_maps_fields():
    payload = {
        "status": "ok",
        "data": {
            "time": 100,
            "message_type": "group",
            "message_id": 3,
            "real_id": 4,
            "nickname": "nick",
            "sex": "female",
            "sender": {"user_id": 6},
            "message": [{"type": "text", "data": {"text": "yo"}}],
        },
    }
    with respx.mock(base_url=BASE) as mock:
        mock.post("/get_msg").mock(return_value=httpx.Response(200, json=payload))
        msg = await api(BASE).get_msg(3)
    assert msg.message_type == "group"
    assert (msg.time, msg.message_id, msg.real_id) == (100, 3, 4)
    assert (msg.sender.user_id, msg.sender.nickname, msg.sender.sex) == (6, "nick", "female")
    assert msg.data[0].type == "text"
    assert msg.data[0].data.text == "yo"


@pytest.mark.asyncio
async def test_do_forward_id():
    with respx.mock(base_url=BASE) as mock:
        mock.post("/send_group_forward_msg").mock(
            return_value=httpx.Response(200, json={"status": "ok", "data": {"forward_id": "fw"}})
        )
        fid = await api(BASE).markdown_build("bot", 1).set_markdown("x").do_forward_id()
    assert fid == "fw"


@pytest.mark.asyncio
async def test_custom_path_and_client():
    async with httpx.AsyncClient() as client:
        b = Builder(BASE + "/", client)
        b.path = "custom"
        with respx.mock(base_url=BASE) as mock:
            route = mock.post("/custom").mock(
                return_value=httpx.Response(200, json={"status": "ok"})
            )
            await b.do()
    assert route.called