"""
Connection handles backed by the Channels channel layer.

Each consumer owns one ChannelConnection. Sending puts a message on the
consumer's own channel; the consumer's ``relay_event`` handler writes it to the
socket. The in-memory layer raises ChannelFull when a consumer stops draining
its channel, which is reported back to the directory as a failed send.
"""

from __future__ import annotations

import logging
from typing import Any

from channels.exceptions import ChannelFull

from .events import OutboundEvent

logger = logging.getLogger(__name__)

# Channels maps "relay.event" onto the consumer method ``relay_event``.
RELAY_MESSAGE_TYPE = "relay.event"


class ChannelConnection:
    def __init__(self, connection_id: str, channel_layer: Any, channel_name: str):
        self.connection_id = connection_id
        self.channel_layer = channel_layer
        self.channel_name = channel_name

    async def send(self, event: OutboundEvent) -> bool:
        try:
            await self.channel_layer.send(
                self.channel_name,
                {"type": RELAY_MESSAGE_TYPE, "payload": event.to_wire()},
            )
        except ChannelFull:
            logger.warning("Channel full for connection %s", self.connection_id)
            return False
        return True

    def __repr__(self) -> str:
        return f"ChannelConnection({self.connection_id!r}, {self.channel_name!r})"
