"""Outbound chat.postMessage payload."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class OutboundMessage(BaseModel):
    """Message body sent to Slack.

    Field order is the wire order. Optional fields left as None are dropped
    from the JSON entirely.
    """

    model_config = ConfigDict(frozen=True)

    channel: str
    icon_emoji: Optional[str] = None
    text: str
    username: Optional[str] = None
    thread_ts: Optional[str] = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


def build_message(
    channel: str,
    text: str,
    icon_emoji: Optional[str] = None,
    username: Optional[str] = None,
    thread_ts: Optional[str] = None,
) -> OutboundMessage:
    return OutboundMessage(
        channel=channel,
        icon_emoji=icon_emoji,
        text=text,
        username=username,
        thread_ts=thread_ts,
    )
