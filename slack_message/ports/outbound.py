"""Outbound ports — interfaces for chat delivery backends."""

from typing import Protocol, runtime_checkable

from slack_message.message import OutboundMessage
from slack_message.response import InboundResponse


@runtime_checkable
class ChatPort(Protocol):
    """Interface for clients that deliver one message per call."""

    async def send(self, message: OutboundMessage) -> InboundResponse: ...
