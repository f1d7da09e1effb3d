"""
WebSocket consumer for stranger matchmaking.

Key behavior:
- URL: /ws/match/
- One consumer instance per browser tab; the server assigns its connection_id.
- Inbound frames are validated into event models and handed to the SessionDirectory.
- Everything the directory sends (including events addressed to this same socket)
  arrives through the channel layer and is written out by ``relay_event``.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Dict, Optional

from channels.generic.websocket import AsyncWebsocketConsumer
from pydantic import ValidationError

from .apps import get_directory
from .connections import ChannelConnection
from .directory import SessionDirectory
from .events import (
    Answer,
    DisconnectManual,
    FindMatch,
    IceCandidate,
    InboundEvent,
    Offer,
    SendMessage,
    connected,
    error_event,
    parse_inbound,
)

logger = logging.getLogger(__name__)


class MatchConsumer(AsyncWebsocketConsumer):
    """
    Transport for one participant.

    ``directory`` may be injected with ``MatchConsumer.as_asgi(directory=...)``;
    otherwise the process-wide directory owned by the matchmaking app is used.
    """

    def __init__(self, *args: Any, directory: Optional[SessionDirectory] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.connection_id: str = uuid.uuid4().hex  # server-assigned per-connection id
        self.directory: SessionDirectory = directory or get_directory()

    async def connect(self) -> None:
        await self.accept()
        await self.directory.register(ChannelConnection(self.connection_id, self.channel_layer, self.channel_name))
        await self.send_json(connected(self.connection_id).to_wire())

    async def disconnect(self, close_code: int) -> None:
        logger.info("Connection %s closed (code=%s)", self.connection_id, close_code)
        await self.directory.disconnect(self.connection_id)

    async def receive(self, text_data: Optional[str] = None, bytes_data: Optional[bytes] = None) -> None:
        if text_data is None:
            await self.send_json(error_event("binary frames are not supported").to_wire())
            return

        try:
            event = parse_inbound(text_data)
        except ValidationError as e:
            logger.warning("Rejected frame from %s: %s", self.connection_id, e.errors(include_input=False))
            await self.send_json(error_event(_describe(e)).to_wire())
            return

        await self.dispatch_event(event)

    async def dispatch_event(self, event: InboundEvent) -> None:
        if isinstance(event, FindMatch):
            await self.directory.request_match(self.connection_id)
        elif isinstance(event, (SendMessage, Offer, Answer, IceCandidate)):
            await self.directory.relay(self.connection_id, event)
        elif isinstance(event, DisconnectManual):
            await self.directory.leave(self.connection_id)
        else:
            raise TypeError(f"Unhandled inbound event: {event!r}")

    async def relay_event(self, message: Dict[str, Any]) -> None:
        """
        Handler for directory deliveries addressed to this connection.
        """
        await self.send_json(message["payload"])

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.send(text_data=json.dumps(payload, separators=(",", ":"), ensure_ascii=False))


def _describe(error: ValidationError) -> str:
    first = error.errors(include_url=False)[0]
    if first["type"] == "json_invalid":
        return "invalid_json"
    if first["type"] == "union_tag_invalid":
        return "unknown_event"
    if first["type"] == "union_tag_not_found":
        return "missing_event"
    location = ".".join(str(part) for part in first["loc"])
    return f"invalid_payload: {location}: {first['msg']}"
