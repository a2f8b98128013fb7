"""chat.postMessage response parsing.

Slack reports API-level failures in the body (``"ok": false``), usually with
HTTP 200. Those parse into a normal ``InboundResponse``; only bodies that are
not the expected JSON shape raise ``MalformedResponse``.
"""

from typing import Optional, Union

from pydantic import BaseModel, StrictBool, ValidationError, model_validator

from slack_message.errors import MalformedResponse


class Icons(BaseModel):
    emoji: Optional[str] = None


class PostedMessage(BaseModel):
    """Echo of the posted message."""

    type: str
    app_id: Optional[str] = None
    bot_id: Optional[str] = None
    team: Optional[str] = None
    text: str
    ts: str
    user: Optional[str] = None
    username: Optional[str] = None
    icons: Optional[Icons] = None


class InboundResponse(BaseModel):
    ok: StrictBool
    channel: Optional[str] = None
    ts: Optional[str] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    message: Optional[PostedMessage] = None

    @model_validator(mode="after")
    def _check_success_fields(self) -> "InboundResponse":
        if self.ok and not (self.ts and self.channel):
            raise ValueError("ok response is missing 'ts' or 'channel'")
        return self

    @property
    def failure_reason(self) -> Optional[str]:
        if self.ok:
            return None
        return self.error or "unknown_error"

    @property
    def icon_emoji(self) -> Optional[str]:
        if self.message is None or self.message.icons is None:
            return None
        return self.message.icons.emoji

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(exclude_none=True, indent=indent)


def parse_response(raw_body: Union[str, bytes]) -> InboundResponse:
    """Parse a raw response body.

    Raises:
        MalformedResponse: the body is not JSON, or not the expected shape.
    """
    try:
        return InboundResponse.model_validate_json(raw_body)
    except ValidationError as e:
        body = raw_body.decode("utf-8", "replace") if isinstance(raw_body, bytes) else raw_body
        raise MalformedResponse(e, body) from e
