"""
Session directory: the matchmaking and relay core.

Tracks two structures for the lifetime of the process:
- the waiting queue: connection_ids seeking a partner, strict FIFO, no duplicates
- the pairing table: connection_id -> partner connection_id, always symmetric

A connection_id is never in both at once. Live connection handles are kept in a
registry so stale queue entries and dangling partners can be detected and dropped.

Every public coroutine holds one asyncio.Lock for its whole duration, including
the sends it triggers, so operations never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Protocol

from .events import OutboundEvent, PeerDisconnected, RelayEvent, Waiting, match_found

logger = logging.getLogger(__name__)

DEFAULT_WAITING_MESSAGE = "Searching for someone..."


class Connection(Protocol):
    """Send capability for one live participant session, owned by the transport."""

    connection_id: str

    async def send(self, event: OutboundEvent) -> bool:
        """Deliver an event. Returns False if the connection can no longer receive."""
        ...


@dataclass(frozen=True)
class DirectoryStats:
    connected: int
    waiting: int
    paired: int

    def as_dict(self) -> Dict[str, int]:
        return {"connected": self.connected, "waiting": self.waiting, "paired": self.paired}


class SessionDirectory:
    """
    Pairs waiting connections and relays events between partners.

    Construct one per process and inject it into whatever handles connection
    events; nothing else should touch the queue or the table.
    """

    def __init__(self, waiting_message: str = DEFAULT_WAITING_MESSAGE):
        self.waiting_message = waiting_message
        self._lock = asyncio.Lock()
        self._connections: Dict[str, Connection] = {}
        self._waiting: Deque[str] = deque()
        self._partners: Dict[str, str] = {}

    # --- transport lifecycle ---

    async def register(self, connection: Connection) -> None:
        async with self._lock:
            self._connections[connection.connection_id] = connection
        logger.info("Connection registered: %s", connection.connection_id)

    async def disconnect(self, connection_id: str) -> None:
        """Transport-level disconnect: leave, then forget the handle."""
        async with self._lock:
            await self._drop(connection_id)

    # --- matchmaking ---

    async def request_match(self, connection_id: str) -> None:
        async with self._lock:
            # Re-entry from WAITING or PAIRED always goes through cleanup first.
            await self._leave(connection_id)

            while self._waiting:
                partner_id = self._waiting.popleft()
                if partner_id == connection_id:
                    continue
                if partner_id not in self._connections:
                    logger.debug("Discarding stale waiting entry %s", partner_id)
                    continue

                self._partners[connection_id] = partner_id
                self._partners[partner_id] = connection_id
                logger.info("Matched %s (initiator) with %s (receiver)", connection_id, partner_id)

                if not await self._send(connection_id, match_found("initiator", partner_id)):
                    # The receiver has not been told yet: it keeps its place at the head.
                    del self._partners[connection_id]
                    del self._partners[partner_id]
                    self._waiting.appendleft(partner_id)
                    self._connections.pop(connection_id, None)
                    logger.info("Connection removed: %s; %s stays waiting", connection_id, partner_id)
                    return
                if not await self._send(partner_id, match_found("receiver", connection_id)):
                    await self._drop(partner_id)
                return

            self._waiting.append(connection_id)
            logger.info("Connection %s waiting (queue length %d)", connection_id, len(self._waiting))
            if not await self._send(connection_id, Waiting(data=self.waiting_message)):
                await self._drop(connection_id)

    async def relay(self, connection_id: str, event: RelayEvent) -> None:
        """Forward a chat or signaling event to the sender's partner, if any."""
        async with self._lock:
            partner_id = self._partners.get(connection_id)
            if partner_id is None:
                logger.debug("Dropping %s from unpaired connection %s", event.event, connection_id)
                return
            if not await self._send(partner_id, event.forwarded()):
                await self._drop(partner_id)

    async def leave(self, connection_id: str) -> None:
        async with self._lock:
            await self._leave(connection_id)

    # --- read-only views ---

    def partner_of(self, connection_id: str) -> Optional[str]:
        return self._partners.get(connection_id)

    def is_waiting(self, connection_id: str) -> bool:
        return connection_id in self._waiting

    def waiting_ids(self) -> List[str]:
        return list(self._waiting)

    def stats(self) -> DirectoryStats:
        return DirectoryStats(
            connected=len(self._connections),
            waiting=len(self._waiting),
            paired=len(self._partners),
        )

    async def close(self) -> None:
        """Drop all state. Called once on process shutdown."""
        async with self._lock:
            logger.info(
                "Closing session directory (%d connected, %d waiting, %d paired)",
                len(self._connections),
                len(self._waiting),
                len(self._partners),
            )
            self._waiting.clear()
            self._partners.clear()
            self._connections.clear()

    # --- internals (caller holds the lock) ---

    async def _leave(self, connection_id: str) -> None:
        try:
            self._waiting.remove(connection_id)
        except ValueError:
            pass

        partner_id = self._partners.pop(connection_id, None)
        if partner_id is None:
            return
        self._partners.pop(partner_id, None)
        logger.info("Pair %s <-> %s dissolved by %s", connection_id, partner_id, connection_id)

        if partner_id in self._connections:
            if not await self._send(partner_id, PeerDisconnected()):
                await self._drop(partner_id)

    async def _drop(self, connection_id: str) -> None:
        await self._leave(connection_id)
        if self._connections.pop(connection_id, None) is not None:
            logger.info("Connection removed: %s", connection_id)

    async def _send(self, connection_id: str, event: OutboundEvent) -> bool:
        connection = self._connections.get(connection_id)
        if connection is None:
            return False
        ok = await connection.send(event)
        if not ok:
            logger.warning("Send of %s to %s failed; treating connection as gone", event.event, connection_id)
        return ok
