"""
Pydantic models for the matchmaking wire protocol.

Every frame is a JSON object of the shape ``{"event": <name>, "data": <payload>}``.
Inbound frames are parsed into one of the variants of ``InboundEvent`` (a union
discriminated on ``event``); outbound frames are built from the models at the
bottom of this module and serialized with ``to_wire``.

Signaling payloads are typed as ``Any`` and are passed through untouched.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Event(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- inbound (client -> server) ---


class FindMatch(_Event):
    event: Literal["find-match"] = "find-match"


class DisconnectManual(_Event):
    event: Literal["disconnect-manual"] = "disconnect-manual"


class SendMessage(_Event):
    event: Literal["send-message"] = "send-message"
    data: str

    def forwarded(self) -> "ReceiveMessage":
        return ReceiveMessage(data=self.data)


class Offer(_Event):
    """Session description offer. Relayed under the same name."""

    event: Literal["offer"] = "offer"
    data: Any = None

    def forwarded(self) -> "Offer":
        return self


class Answer(_Event):
    """Session description answer. Relayed under the same name."""

    event: Literal["answer"] = "answer"
    data: Any = None

    def forwarded(self) -> "Answer":
        return self


class IceCandidate(_Event):
    """Network candidate. Relayed under the same name."""

    event: Literal["ice-candidate"] = "ice-candidate"
    data: Any = None

    def forwarded(self) -> "IceCandidate":
        return self


RelayEvent = Union[SendMessage, Offer, Answer, IceCandidate]

InboundEvent = Annotated[
    Union[FindMatch, DisconnectManual, SendMessage, Offer, Answer, IceCandidate],
    Field(discriminator="event"),
]

inbound_event_adapter: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)


def parse_inbound(text_data: str) -> InboundEvent:
    """Parse a text frame. Raises ``pydantic.ValidationError`` on malformed input."""
    return inbound_event_adapter.validate_json(text_data)


# --- outbound (server -> client) ---


class ConnectedPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    connection_id: str = Field(alias="connectionId")


class MatchFoundPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Literal["initiator", "receiver"]
    partner_id: str = Field(alias="partnerId")


class ErrorPayload(BaseModel):
    message: str


class Connected(_Event):
    event: Literal["connected"] = "connected"
    data: ConnectedPayload


class Waiting(_Event):
    event: Literal["waiting"] = "waiting"
    data: str


class MatchFound(_Event):
    event: Literal["match-found"] = "match-found"
    data: MatchFoundPayload


class ReceiveMessage(_Event):
    event: Literal["receive-message"] = "receive-message"
    data: str


class PeerDisconnected(_Event):
    event: Literal["peer-disconnected"] = "peer-disconnected"


class ErrorEvent(_Event):
    """Rejected inbound frame. Emitted by the transport, never by the directory."""

    event: Literal["error"] = "error"
    data: ErrorPayload


OutboundEvent = Union[
    Connected,
    Waiting,
    MatchFound,
    ReceiveMessage,
    Offer,
    Answer,
    IceCandidate,
    PeerDisconnected,
    ErrorEvent,
]


def connected(connection_id: str) -> Connected:
    return Connected(data=ConnectedPayload(connection_id=connection_id))


def match_found(role: str, partner_id: str) -> MatchFound:
    return MatchFound(data=MatchFoundPayload(role=role, partner_id=partner_id))


def error_event(message: str) -> ErrorEvent:
    return ErrorEvent(data=ErrorPayload(message=message))
