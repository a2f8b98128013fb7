"""Port interfaces."""

from slack_message.ports.outbound import ChatPort

__all__ = ["ChatPort"]
