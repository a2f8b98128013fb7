"""Unit tests for SlackClient."""

import asyncio
import json

import aiohttp
import pytest
from unittest.mock import patch

from slack_message.config import SLACK_POST_MESSAGE_URL
from slack_message.errors import MalformedResponse, TransportError
from slack_message.message import build_message
from slack_message.slack_client import SlackClient

OK_BODY = {
    "ok": True,
    "channel": "test-channel",
    "ts": "1734376519.228539",
    "message": {
        "type": "message",
        "text": "testMessageText",
        "ts": "1734376519.228539",
        "username": "TEST-USERNAME",
        "icons": {"emoji": ":test:"},
    },
}


def _mock_aiohttp_session(body, status=200, error=None, calls=None):
    """Return a class that replaces aiohttp.ClientSession.

    body: raw response body (str) returned by read().
    error: exception raised from post() instead of responding.
    calls: list that receives (url, kwargs, session_kwargs) per post().
    """

    class FakeResponse:
        def __init__(self):
            self.status = status

        async def read(self):
            return body.encode("utf-8")

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, **kwargs):
            self._kwargs = kwargs

        def post(self, url, **kwargs):
            if error is not None:
                raise error
            if calls is not None:
                calls.append((url, kwargs, self._kwargs))
            return FakeResponse()

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


@pytest.fixture
def message():
    return build_message(
        channel="testChannel",
        icon_emoji=":test:",
        text="testMessageText",
        username="testName",
    )


class TestInit:
    def test_defaults(self):
        client = SlackClient("testToken")
        assert client.bearer_token == "Bearer testToken"
        assert client.url == SLACK_POST_MESSAGE_URL
        assert client.timeout == 30

    def test_custom_url(self):
        client = SlackClient("t", url="http://localhost:9999/api/chat.postMessage", timeout=5)
        assert client.url == "http://localhost:9999/api/chat.postMessage"
        assert client.timeout == 5

    def test_repr_hides_token(self):
        assert "testToken" not in repr(SlackClient("testToken"))


class TestBuildRequest:
    def test_method_and_url(self, message):
        req = SlackClient("testToken").build_request(message)
        assert req.method == "POST"
        assert req.url == "https://slack.com/api/chat.postMessage"

    def test_headers(self, message):
        req = SlackClient("testToken").build_request(message)
        assert req.headers["Authorization"] == "Bearer testToken"
        assert req.headers["Content-Type"] == "application/json; charset=utf-8"

    def test_body(self, message):
        req = SlackClient("testToken").build_request(message)
        assert req.body.decode("utf-8") == (
            '{"channel":"testChannel","icon_emoji":":test:",'
            '"text":"testMessageText","username":"testName"}'
        )

    def test_body_without_optionals(self):
        req = SlackClient("testToken").build_request(build_message(channel="c", text="t"))
        assert req.body == b'{"channel":"c","text":"t"}'


class TestSend:
    @pytest.mark.asyncio
    async def test_success(self, message):
        calls = []
        mock_session = _mock_aiohttp_session(json.dumps(OK_BODY), calls=calls)
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            res = await client.send(message)
        assert res.ok is True
        assert res.ts == "1734376519.228539"
        assert res.icon_emoji == ":test:"

        url, kwargs, session_kwargs = calls[0]
        assert url == SLACK_POST_MESSAGE_URL
        assert kwargs["headers"]["Authorization"] == "Bearer testToken"
        assert kwargs["data"] == message.to_json().encode("utf-8")
        assert session_kwargs["timeout"].total == 30

    @pytest.mark.asyncio
    async def test_api_failure_is_data(self, message):
        mock_session = _mock_aiohttp_session('{"ok":false,"error":"channel_not_found"}')
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            res = await client.send(message)
        assert res.ok is False
        assert res.error == "channel_not_found"

    @pytest.mark.asyncio
    async def test_http_error_status_still_parsed(self, message):
        mock_session = _mock_aiohttp_session('{"ok":false,"error":"ratelimited"}', status=429)
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            res = await client.send(message)
        assert res.failure_reason == "ratelimited"

    @pytest.mark.asyncio
    async def test_malformed_body(self, message):
        mock_session = _mock_aiohttp_session("upstream connect error", status=503)
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            with pytest.raises(MalformedResponse) as exc_info:
                await client.send(message)
        assert exc_info.value.body == "upstream connect error"

    @pytest.mark.asyncio
    async def test_connection_error(self, message):
        cause = aiohttp.ClientConnectionError("Connection refused")
        mock_session = _mock_aiohttp_session("", error=cause)
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            with pytest.raises(TransportError) as exc_info:
                await client.send(message)
        assert exc_info.value.cause is cause
        assert exc_info.value.timed_out is False
        assert "Connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout(self, message):
        mock_session = _mock_aiohttp_session("", error=asyncio.TimeoutError())
        client = SlackClient("testToken", timeout=0.5)
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            with pytest.raises(TransportError) as exc_info:
                await client.send(message)
        assert exc_info.value.timed_out is True
        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_reusable_for_sequential_sends(self, message):
        calls = []
        mock_session = _mock_aiohttp_session(json.dumps(OK_BODY), calls=calls)
        client = SlackClient("testToken")
        with patch("slack_message.slack_client.aiohttp.ClientSession", mock_session):
            await client.send(message)
            await client.send(message)
        assert len(calls) == 2
        assert calls[0][1] == calls[1][1]
