import pytest

from lagrange_sdk.event_message import EventMessage, MessageData, Sender

BOT = 3392313023


def _payload():
    return {
        "message_type": "group",
        "sub_type": "normal",
        "message_id": 77,
        "group_id": 555,
        "user_id": 42,
        "message": [
            {"type": "text", "data": {"text": "hello"}},
            {"type": "at", "data": {"qq": str(BOT)}},
            {"type": "image", "data": {"file": "a.jpg", "url": "http://img.example.com/a.jpg"}},
            {"type": "json", "data": {"data": "{}", "id": "9"}},
        ],
        "raw_message": "hello",
        "sender": {"user_id": 42, "nickname": "nick", "card": "", "role": "member"},
    }


def test_from_dict_fields():
    event = EventMessage.from_dict(_payload())
    assert event.message_type == "group"
    assert event.group_id == 555
    assert event.message_id == 77
    assert event.sender.nickname == "nick"
    assert len(event.message) == 4


def test_segment_accessors():
    event = EventMessage.from_dict(_payload())
    assert event.types() == ["text", "at", "image", "json"]
    assert event.texts()[0] == "hello"
    assert event.files()[2] == "a.jpg"
    assert event.urls()[2] == "http://img.example.com/a.jpg"
    assert event.ids()[3] == "9"
    assert event.data() == "{}"
    assert event.qqs()[1] == str(BOT)
    assert all(len(x) == 4 for x in (event.texts(), event.files(), event.urls(), event.qqs()))


def test_at_qqs_only_at_segments():
    payload = _payload()
    payload["message"].append({"type": "text", "data": {"qq": "1"}})
    event = EventMessage.from_dict(payload)
    assert event.at_qqs() == [str(BOT)]


def test_at_bot():
    event = EventMessage.from_dict(_payload())
    assert event.at_bot(BOT)
    assert not event.at_bot(BOT + 1)


def test_is_from_bot():
    event = EventMessage.from_dict(_payload())
    assert event.is_from_bot(42)
    assert not event.is_from_bot(BOT)


def test_display_card_falls_back_to_nickname():
    event = EventMessage.from_dict(_payload())
    assert event.display_card() == "nick"
    event.sender.card = "groupcard"
    assert event.display_card() == "groupcard"


def test_missing_message_gives_empty_accessors():
    event = EventMessage.from_dict({"message_type": "private"})
    assert event.texts() == []
    assert event.data() == ""
    assert not event.at_bot(BOT)


def test_segment_accepts_capitalised_data_key():
    seg = MessageData.from_dict({"type": "text", "Data": {"text": "hi"}})
    assert seg.text == "hi"


def test_sender_round_values():
    sender = Sender.from_dict({"user_id": 7, "age": 20, "title": "t"})
    assert (sender.user_id, sender.age, sender.title) == (7, 20, "t")


def test_wrong_field_type_raises():
    with pytest.raises(ValueError):
        EventMessage.from_dict({"message_id": "x"})


def test_message_not_list_raises():
    with pytest.raises(ValueError):
        EventMessage.from_dict({"message": "text"})


def test_non_object_raises():
    with pytest.raises(ValueError):
        EventMessage.from_dict([1, 2])