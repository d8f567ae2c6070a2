import httpx
import pytest

from chat_core.domain.exceptions import ServerError, TransportError
from chat_core.domain.models import ExchangeRequest, Turn, PLACEHOLDER_REPLY
from chat_core.exchangers.proxy_client import ProxyExchanger


class SettingsStub:
    http_timeout = 1.0
    proxy_url = "http://localhost:3000/api/proxy"


def _request(content="hi"):
    return ExchangeRequest(turn=Turn(role="user", content=content), user_id="u1", session_id="s1")


def _fake_client(resp, captured=None):
    class Client:
        def __init__(self, *a, **kw):
            if captured is not None:
                captured["client_kwargs"] = kw

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
            if isinstance(resp, Exception):
                raise resp
            return resp

    return Client


class Resp:
    def __init__(self, status_code=200, body=None, invalid_json=False):
        self.status_code = status_code
        self._body = body
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


def test_proxy_exchanger_parse_basic(monkeypatch):
    captured = {}
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(body={"output_data": {"content": "ok"}}), captured))
    res = ProxyExchanger(SettingsStub()).send(_request())
    assert res.content == "ok"
    assert res.degraded is False
    assert captured["url"] == "http://localhost:3000/api/proxy"
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["client_kwargs"]["timeout"] == 1.0


def test_proxy_exchanger_payload(monkeypatch):
    captured = {}
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(body={"output_data": {"content": "ok"}}), captured))
    ProxyExchanger(SettingsStub()).send(_request("hello"))
    payload = captured["payload"]
    assert payload["data"]["message"] == {"role": "user", "content": "hello"}
    assert payload["stateful"] is True
    assert payload["stream"] is False
    assert payload["verbose"] is False
    assert payload["user_id"] == "u1"
    assert payload["session_id"] == "s1"


@pytest.mark.parametrize(
    "body",
    [{}, {"output_data": None}, {"output_data": {}}, {"output_data": {"content": ""}}, ["not", "a", "dict"]],
)
def test_proxy_exchanger_missing_content_degrades(monkeypatch, body):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(body=body)))
    res = ProxyExchanger(SettingsStub()).send(_request())
    assert res.content == PLACEHOLDER_REPLY
    assert res.degraded is True


def test_proxy_exchanger_server_error(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(status_code=502, body={})))
    with pytest.raises(ServerError) as exc_info:
        ProxyExchanger(SettingsStub()).send(_request())
    err = exc_info.value
    assert err.kind == "ServerError"
    assert err.message == "Server error: 502"
    assert err.http_status == 502


def test_proxy_exchanger_invalid_json(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(invalid_json=True)))
    with pytest.raises(ServerError) as exc_info:
        ProxyExchanger(SettingsStub()).send(_request())
    assert exc_info.value.code == "INVALID_RESPONSE"


def test_proxy_exchanger_transport_error(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(httpx.ConnectError("connection refused")))
    with pytest.raises(TransportError) as exc_info:
        ProxyExchanger(SettingsStub()).send(_request())
    assert exc_info.value.kind == "TransportError"
    assert "connection refused" in exc_info.value.message
