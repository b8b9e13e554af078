"""Tests for the HTTP transport."""

import json

import httpx
import pytest

from smartcat.errors import NetworkError, StatusError, TransportError
from smartcat.transport import NON_TEXT_BODY, send


def test_send_posts_json_and_returns_body(mock_http):
    client, transport = mock_http(body={"ok": True})

    body = send(
        "https://api.example.com/v1/chat",
        {"model": "m", "messages": [], "stream": False},
        {"Content-Type": "application/json", "Authorization": "Bearer k"},
        client=client,
    )

    assert json.loads(body) == {"ok": True}
    request = transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.com/v1/chat"
    assert request.headers["Authorization"] == "Bearer k"
    assert transport.last_json == {"model": "m", "messages": [], "stream": False}


def test_send_raises_status_error_with_body(mock_http):
    client, transport = mock_http(status_code=401, content=b'{"error": "bad key"}')

    with pytest.raises(StatusError) as exc:
        send("https://x", {}, {}, client=client)

    assert exc.value.status_code == 401
    assert exc.value.body == '{"error": "bad key"}'
    assert "401" in str(exc.value)
    assert len(transport.requests) == 1


def test_send_status_error_with_binary_body(mock_http):
    client, _ = mock_http(status_code=500, content=b"\xff\xfe\x00")

    with pytest.raises(StatusError) as exc:
        send("https://x", {}, {}, client=client)

    assert exc.value.body == NON_TEXT_BODY


def test_send_wraps_connection_failures(mock_http):
    client, transport = mock_http(error=httpx.ConnectError("name resolution failed"))

    with pytest.raises(NetworkError) as exc:
        send("https://x", {}, {}, client=client)

    assert isinstance(exc.value, TransportError)
    assert isinstance(exc.value.cause, httpx.ConnectError)
    assert len(transport.requests) == 1


def test_send_wraps_undecodable_bodies():
    def _handler(request):
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            stream=httpx.ByteStream(b"not gzip"),
        )

    with httpx.Client(transport=httpx.MockTransport(_handler)) as client:
        with pytest.raises(NetworkError) as exc:
            send("https://x", {}, {}, client=client)

    assert isinstance(exc.value.cause, httpx.DecodingError)


def test_send_follows_redirects_with_its_own_client(monkeypatch):
    seen = []

    def _handler(request):
        seen.append(str(request.url))
        if request.url.path == "/old":
            return httpx.Response(307, headers={"Location": "https://api.example.com/new"})
        return httpx.Response(200, json={"moved": True})

    real_client = httpx.Client

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(_handler), **kwargs)

    monkeypatch.setattr("smartcat.transport.httpx.Client", _client)

    body = send("https://api.example.com/old", {"model": "m"}, {})

    assert json.loads(body) == {"moved": True}
    assert seen == ["https://api.example.com/old", "https://api.example.com/new"]
