import dataclasses

import pytest

from chat_core.domain.conversation import Conversation
from chat_core.domain.models import Turn, ExchangeRequest


def test_conversation_starts_empty():
    conv = Conversation()
    assert len(conv) == 0
    assert conv.last is None
    assert conv.to_list() == []


def test_append_returns_new_conversation():
    conv = Conversation()
    t1 = Turn(role="user", content="hi")
    conv2 = conv.append(t1)
    assert len(conv) == 0
    assert list(conv2) == [t1]
    assert conv2.last == t1


def test_append_keeps_order_and_duplicates():
    conv = Conversation()
    for content in ["a", "b", "a"]:
        conv = conv.append(Turn(role="user", content=content))
    assert [t.content for t in conv] == ["a", "b", "a"]
    assert conv[1].content == "b"


def test_turn_is_immutable():
    t = Turn(role="agent", content="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.content = "y"


def test_exchange_request_payload_shape():
    req = ExchangeRequest(turn=Turn(role="user", content="hello"), user_id="u1", session_id="s1")
    assert req.to_payload() == {
        "data": {"message": {"role": "user", "content": "hello"}},
        "stateful": True,
        "stream": False,
        "user_id": "u1",
        "session_id": "s1",
        "verbose": False,
    }
