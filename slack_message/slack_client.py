"""Slack chat.postMessage client using aiohttp."""

import asyncio
from dataclasses import dataclass, field
from typing import Dict

import aiohttp

from slack_message.config import DEFAULT_TIMEOUT_SECONDS, SLACK_POST_MESSAGE_URL
from slack_message.errors import TransportError
from slack_message.message import OutboundMessage
from slack_message.response import InboundResponse, parse_response

CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class PreparedRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class SlackClient:
    """Async Slack web API client posting one message per send()."""

    def __init__(
        self,
        token: str,
        url: str = SLACK_POST_MESSAGE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.bearer_token = f"Bearer {token}"
        self.url = url
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"SlackClient(url={self.url!r}, timeout={self.timeout!r})"

    def build_request(self, message: OutboundMessage) -> PreparedRequest:
        return PreparedRequest(
            method="POST",
            url=self.url,
            headers={
                "Authorization": self.bearer_token,
                "Content-Type": CONTENT_TYPE,
            },
            body=message.to_json().encode("utf-8"),
        )

    async def send(self, message: OutboundMessage) -> InboundResponse:
        """Post a message and parse Slack's reply.

        The body is parsed whatever the HTTP status; ``ok`` decides success.

        Raises:
            TransportError: connection, DNS or timeout failure.
            MalformedResponse: the reply isn't the expected JSON.
        """
        request = self.build_request(message)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    request.url,
                    headers=request.headers,
                    data=request.body,
                ) as resp:
                    body = await resp.read()
        except asyncio.TimeoutError as e:
            raise TransportError(e) from e
        except aiohttp.ClientError as e:
            raise TransportError(e) from e
        return parse_response(body)
